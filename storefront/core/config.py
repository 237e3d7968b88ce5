# storefront/core/config.py
import os
from typing import List

from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Application settings read from the environment.

    Keyword overrides win over environment values, which lets tests and
    embedding code build a fully specified instance without touching os.environ.
    A signing secret is mandatory: there is no fallback value.
    """

    # --- API Info ---
    API_TITLE: str = "Storefront API"
    API_DESCRIPTION: str = "Accounts, shopping cart and wishlist for the storefront."
    API_VERSION: str = "1.0.0"

    def __init__(self, **overrides):
        # --- Server Configuration ---
        self.API_PREFIX: str = os.getenv("API_PREFIX", "/api")
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "5000"))
        self.CORS_ORIGINS: List[str] = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]

        # --- Database ---
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
        self.DB_ECHO: bool = _env_bool("DB_ECHO")
        # Optimistic-lock retries for a single cart/wishlist write
        self.MAX_WRITE_ATTEMPTS: int = int(os.getenv("MAX_WRITE_ATTEMPTS", "3"))

        # --- Auth ---
        self.JWT_SECRET: str = os.getenv("JWT_SECRET", "")
        self.JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
        self.TOKEN_EXPIRE_HOURS: int = int(os.getenv("TOKEN_EXPIRE_HOURS", "24"))
        self.BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise ConfigurationError(f"Unknown setting: {key}")
            setattr(self, key, value)

        self._validate()

    def _validate(self) -> None:
        if not self.JWT_SECRET:
            raise ConfigurationError(
                "JWT_SECRET is not set. Refusing to start without a token signing secret."
            )
        if self.TOKEN_EXPIRE_HOURS <= 0:
            raise ConfigurationError("TOKEN_EXPIRE_HOURS must be positive")
        if self.MAX_WRITE_ATTEMPTS < 1:
            raise ConfigurationError("MAX_WRITE_ATTEMPTS must be at least 1")
        if not 4 <= self.BCRYPT_ROUNDS <= 31:
            raise ConfigurationError("BCRYPT_ROUNDS must be between 4 and 31")
