# storefront/auth/service.py

from typing import Annotated, Optional, Tuple

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from ..core.context import ServiceContext, AppContext
from ..core.exceptions import (
    DuplicateEmailError,
    UserNotFoundError,
    InvalidCredentialsError,
    UnauthenticatedError,
    UserGoneError,
)
from ..database.core import DbSession
from ..logging import logger
from ..schemas.user import RegisterUserRequest, LoginRequest
from ..users.models import User
from ..users.service import UserStore

bearer_scheme = HTTPBearer(auto_error=False)


async def register_user(ctx: ServiceContext, db: Session, request: RegisterUserRequest) -> User:
    """Creates a user with an empty cart and wishlist."""
    store = UserStore(db, ctx.settings.MAX_WRITE_ATTEMPTS)
    if store.get_by_email(request.email):
        logger.info("Registration rejected: email already registered")
        raise DuplicateEmailError(request.email)

    # bcrypt is deliberately slow; keep it off the event loop
    password_hash = await run_in_threadpool(ctx.passwords.hash, request.password)
    user = store.create(request.name, request.email, password_hash)
    logger.info(f"Successfully registered user {user.id}")
    return user


async def login_user(ctx: ServiceContext, db: Session, request: LoginRequest) -> Tuple[str, User]:
    """Checks credentials and issues a token for the matching user."""
    store = UserStore(db, ctx.settings.MAX_WRITE_ATTEMPTS)
    user = store.get_by_email(request.email)
    if not user:
        logger.info("Login failed: unknown email")
        raise UserNotFoundError()

    matches = await run_in_threadpool(ctx.passwords.verify, request.password, user.password_hash)
    if not matches:
        logger.warning(f"Login failed: invalid password for user {user.id}")
        raise InvalidCredentialsError()

    token, _ = ctx.tokens.issue(user.id)
    store.touch_login(user)
    logger.info(f"User {user.id} logged in")
    return token, user


def get_current_user(
    db: DbSession,
    ctx: AppContext,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> User:
    """
    Authentication gate for protected routes.

    Rejects with UnauthenticatedError when no usable bearer header is present,
    InvalidTokenError when the token fails verification, and UserGoneError when
    the token is fine but its user record is missing. The resolved record is
    handed to the route as its `CurrentUser` argument.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    user_id = ctx.tokens.verify(credentials.credentials)

    user = UserStore(db).get_by_id(user_id)
    if not user:
        raise UserGoneError(user_id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
