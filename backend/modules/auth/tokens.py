"""
Session token service.

Issues and verifies HS256-signed JWTs carrying the user's identity.
The signing key is the single process-wide JWT_SECRET; rotating it
invalidates every outstanding token.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import get_settings
from shared.models import AuthenticatedUser

from .exceptions import ExpiredTokenError, InvalidTokenError, MissingTokenError
from .models import TokenClaims

logger = logging.getLogger(__name__)


class TokenService:
    """
    Implementation of ITokenService backed by PyJWT.

    Tokens embed {sub, user_id, username, iat, exp}; exp is iat plus
    the configured TTL (7 days by default).
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        ttl: Optional[timedelta] = None,
    ):
        settings = get_settings()
        self._secret = secret or settings.jwt_secret
        self._algorithm = algorithm or settings.jwt_algorithm
        self._ttl = ttl or timedelta(days=settings.token_ttl_days)

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_id: int, username: str, now: Optional[datetime] = None) -> str:
        """
        Issue a signed token for the given identity.

        Args:
            user_id: Numeric user ID
            username: Username to embed
            now: Issue time (defaults to the current UTC time)

        Returns:
            Encoded JWT string
        """
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "user_id": user_id,
            "username": username,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Decode and validate a token.

        Raises:
            MissingTokenError: If token is empty
            ExpiredTokenError: If the token's exp has passed
            InvalidTokenError: If the token is malformed or badly signed
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat", "sub"]},
            )
            claims = TokenClaims(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))
        except PydanticValidationError:
            raise InvalidTokenError("Token claims are incomplete")

        return AuthenticatedUser(
            id=claims.user_id,
            username=claims.username,
            issued_at=datetime.fromtimestamp(claims.iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims.exp, tz=timezone.utc),
        )

    def verify(self, token: Optional[str]) -> Optional[AuthenticatedUser]:
        """
        Verify a token, degrading every failure to anonymous (None).
        """
        try:
            return self.decode(token)
        except (MissingTokenError, ExpiredTokenError, InvalidTokenError) as e:
            if token:
                logger.debug(f"Token rejected: {e.code}")
            return None
