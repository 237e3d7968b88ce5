# storefront/utils/password_utils.py

from passlib.context import CryptContext
import logging

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    Salted bcrypt hashing with a tunable work factor.

    Both operations are CPU-bound; async callers should run them through
    starlette's run_in_threadpool.
    """

    def __init__(self, rounds: int = 12):
        self.bcrypt_context = CryptContext(
            schemes=['bcrypt'], deprecated='auto', bcrypt__rounds=rounds
        )

    def hash(self, password: str) -> str:
        """
        Hashes a plain-text password.
        """
        try:
            return self.bcrypt_context.hash(password)
        except Exception:
            logger.exception("Error occurred while hashing password.")
            raise

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verifies a plain-text password against a hashed password.
        """
        if not hashed_password:
            return False
        try:
            return self.bcrypt_context.verify(plain_password, hashed_password)
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False
