# storefront/auth/tokens.py

from datetime import timedelta, datetime, timezone
from typing import Optional, Tuple
from uuid import UUID, uuid4

import jwt
from jwt import PyJWTError

from ..core.exceptions import InvalidTokenError
from ..logging import logger

TOKEN_SCOPE = "access_token"


class TokenService:
    """Issues and verifies stateless, signed, time-limited identity tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", lifetime: timedelta = timedelta(hours=24)):
        if not secret:
            raise ValueError("A token signing secret is required")
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, user_id: UUID, now: Optional[datetime] = None) -> Tuple[str, datetime]:
        """Creates a new JWT access token with a unique ID (jti)."""
        issued_at = now or datetime.now(timezone.utc)
        expire = issued_at + self.lifetime
        encode = {
            'sub': str(user_id),
            'iat': issued_at,
            'exp': expire,
            'scope': TOKEN_SCOPE,
            'jti': str(uuid4()),
        }
        return jwt.encode(encode, self.secret, algorithm=self.algorithm), expire

    def verify(self, token: str) -> UUID:
        """
        Decodes and verifies an access token and returns the user id it names.
        Does not check that the user still exists.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("Token expired")
        except PyJWTError as e:
            logger.warning(f"JWT decode error: {e}")
            raise InvalidTokenError()

        if payload.get('scope') != TOKEN_SCOPE:
            raise InvalidTokenError("Invalid token scope")

        try:
            return UUID(str(payload['sub']))
        except ValueError:
            raise InvalidTokenError("Malformed subject")
