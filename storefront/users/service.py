from copy import deepcopy
from typing import Callable, List, Optional, Any
from uuid import UUID
from datetime import datetime, timezone

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from tenacity import Retrying, stop_after_attempt, retry_if_exception_type

from .models import User
from ..core.exceptions import DuplicateEmailError, ConcurrentModificationError
from ..logging import logger

ListChange = Callable[[List[dict]], Any]

LIST_FIELDS = ("cart", "wishlist")


class UserStore:
    """
    Persistence for user documents.

    Every cart/wishlist write goes through `mutate_lists`, which reads the
    embedded lists, applies a change in memory and persists the whole record.
    The row's `version` column turns a concurrent write on the same user
    into a StaleDataError, which is retried against a freshly loaded record.
    """

    def __init__(self, db: Session, max_attempts: int = 3):
        self.db = db
        self.max_attempts = max_attempts

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def create(self, name: str, email: str, password_hash: str) -> User:
        user = User(
            name=name,
            email=email.lower(),
            password_hash=password_hash,
            cart=[],
            wishlist=[],
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost the race against another registration for the same email
            self.db.rollback()
            raise DuplicateEmailError(email)
        self.db.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    def touch_login(self, user: User) -> None:
        # Bookkeeping only; must not collide with a concurrent cart or wishlist write
        self.db.execute(
            update(User)
            .where(User.id == user.id)
            .values(last_login=datetime.now(timezone.utc))
        )
        self.db.commit()

    def mutate_lists(self, user: User, change: Callable[[dict], Any]) -> Any:
        """
        Apply `change` to copies of the user's embedded lists and persist them.

        `change` receives {"cart": [...], "wishlist": [...]} and edits the
        lists in that mapping; whatever it returns is passed back to the
        caller. Exceptions raised by `change` propagate without a retry.
        """
        # Read before any flush; a failed flush leaves `user` unreadable until rollback
        user_id = user.id
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self.max_attempts),
                retry=retry_if_exception_type(StaleDataError),
                reraise=True,
            ):
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        logger.warning(
                            f"Retrying write for user {user_id} "
                            f"(attempt {attempt.retry_state.attempt_number}/{self.max_attempts})"
                        )
                    lists = {field: deepcopy(getattr(user, field) or []) for field in LIST_FIELDS}
                    result = change(lists)
                    for field in LIST_FIELDS:
                        setattr(user, field, lists[field])
                    try:
                        self.db.commit()
                    except StaleDataError:
                        # Rollback expires the instance; the next attempt reloads it
                        self.db.rollback()
                        logger.warning(f"Concurrent modification detected on user {user_id}")
                        raise
                    return result
        except StaleDataError:
            raise ConcurrentModificationError(user_id, self.max_attempts)

    def mutate_list(self, user: User, field: str, change: ListChange) -> List[dict]:
        """Single-list form of `mutate_lists`; returns the persisted list."""
        if field not in LIST_FIELDS:
            raise ValueError(f"Unknown list field: {field}")

        def apply(lists: dict) -> List[dict]:
            change(lists[field])
            return lists[field]

        return self.mutate_lists(user, apply)
