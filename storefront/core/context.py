# storefront/core/context.py

from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request

from .config import Settings
from ..auth.tokens import TokenService
from ..database.core import Base, build_engine, build_session_factory
from ..utils.password_utils import PasswordHasher
from ..logging import logger


class ServiceContext:
    """
    Process-wide services, built once at startup and shared by every request:
    settings, the database engine and session factory, the token issuer and
    the password hasher.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
        self.session_factory = build_session_factory(self.engine)
        self.tokens = TokenService(
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
            lifetime=timedelta(hours=settings.TOKEN_EXPIRE_HOURS),
        )
        self.passwords = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)

    def init_db(self) -> None:
        # Make sure the models are registered on Base.metadata
        from ..users import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created successfully")

    def dispose(self) -> None:
        self.engine.dispose()


def get_context(request: Request) -> ServiceContext:
    return request.app.state.context


AppContext = Annotated[ServiceContext, Depends(get_context)]
