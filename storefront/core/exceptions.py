# storefront/core/exceptions.py

from enum import Enum
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

class ErrorCode(Enum):
    """Standardized error codes for the application."""

    # Authentication gate
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_TOKEN = "INVALID_TOKEN"
    USER_GONE = "USER_GONE"

    # Registration / login
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    NOT_FOUND = "NOT_FOUND"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Cart / wishlist
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"

    # Request / system
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"
    INTERNAL_ERROR = "INTERNAL_ERROR"

class StorefrontError(Exception):
    """Base exception for all storefront application errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        """Convert to API response format."""
        return {
            "message": self.message,
            "code": self.code.value,
        }

class AuthError(StorefrontError):
    """Request rejected by the authentication gate."""

class UnauthenticatedError(AuthError):
    """No bearer token, or a malformed Authorization header."""

    def __init__(self, message: str = "No token"):
        super().__init__(ErrorCode.UNAUTHENTICATED, message)

class InvalidTokenError(AuthError):
    """Bad signature, expired, or otherwise unreadable token."""

    def __init__(self, message: str = "Token invalid"):
        super().__init__(ErrorCode.INVALID_TOKEN, message)

class UserGoneError(AuthError):
    """Token verified, but its user record no longer exists."""

    def __init__(self, user_id: Any = None):
        super().__init__(
            ErrorCode.USER_GONE,
            "User not found",
            context={"user_id": str(user_id)} if user_id is not None else None,
        )

class DuplicateEmailError(StorefrontError):
    """The email is already registered; the address stays out of the error context."""

    def __init__(self, email: str):
        super().__init__(ErrorCode.DUPLICATE_EMAIL, "User already exists")

class UserNotFoundError(StorefrontError):
    """Exception raised when no user matches the login email."""

    def __init__(self, message: str = "User not found"):
        super().__init__(ErrorCode.NOT_FOUND, message)

class InvalidCredentialsError(StorefrontError):
    """Exception raised when password is invalid."""

    def __init__(self, message: str = "Invalid password"):
        super().__init__(ErrorCode.INVALID_CREDENTIALS, message)

class ItemNotFoundError(StorefrontError):
    def __init__(self, product_id: str, where: str = "cart"):
        super().__init__(
            ErrorCode.ITEM_NOT_FOUND,
            f"Item not in {where}",
            context={"product_id": product_id},
        )

class AlreadyExistsError(StorefrontError):
    def __init__(self, product_id: str, where: str = "wishlist"):
        super().__init__(
            ErrorCode.ALREADY_EXISTS,
            f"Already in {where}",
            context={"product_id": product_id},
        )

class ConcurrentModificationError(StorefrontError):
    """The user record kept changing underneath a write; retries exhausted."""

    def __init__(self, user_id: Any, attempts: int):
        super().__init__(
            ErrorCode.CONCURRENT_MODIFICATION,
            "The record was modified by another request. Please retry.",
            context={"user_id": str(user_id), "attempts": attempts},
        )

class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing or invalid."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
