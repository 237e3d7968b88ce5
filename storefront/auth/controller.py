# storefront/auth/controller.py
from fastapi import APIRouter, HTTPException
from starlette import status

from . import service
from .service import CurrentUser
from ..core.context import AppContext
from ..core.exceptions import StorefrontError
from ..database.core import DbSession
from ..logging import logger
from ..schemas.user import (
    RegisterUserRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    UserSummary,
)

router = APIRouter(prefix='/auth', tags=['auth'])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def register_user(
    register_user_request: RegisterUserRequest,
    db: DbSession,
    ctx: AppContext,
):
    """Register a new user account."""
    try:
        await service.register_user(ctx, db, register_user_request)
        return MessageResponse(message="User registered successfully")
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Registration failed: {e}")
        raise HTTPException(status_code=500, detail="Server error")


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
async def login(
    login_request: LoginRequest,
    db: DbSession,
    ctx: AppContext,
):
    """Login with email and password; returns a bearer token and the user summary."""
    try:
        token, user = await service.login_user(ctx, db, login_request)
        return LoginResponse(
            message="Login successful",
            token=token,
            user=UserSummary.from_user(user),
        )
    except StorefrontError:
        raise
    except Exception as e:
        logger.exception(f"Login error: {e}")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/me", response_model=UserSummary)
async def get_current_user_info(current_user: CurrentUser):
    """Get current user information."""
    return UserSummary.from_user(current_user)
