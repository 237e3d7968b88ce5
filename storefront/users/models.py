# storefront/users/models.py

from sqlalchemy import Column, String, Integer, JSON, DateTime, Uuid
import uuid
from datetime import datetime, timezone
from ..database.core import Base


class User(Base):
    """
    SQLAlchemy model representing one user document.

    The cart and wishlist are embedded JSON arrays on the row itself; there
    are no separate cart/wishlist tables. Lists are always replaced
    wholesale (never mutated in place) so the change is flushed, and every
    flush bumps `version` for optimistic concurrency control.
    """
    __tablename__ = 'users'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    cart = Column(JSON, nullable=False, default=list)
    wishlist = Column(JSON, nullable=False, default=list)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    last_login = Column(DateTime, nullable=True)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        """String representation of the User object."""
        return f"<User(email='{self.email}', name='{self.name}')>"
