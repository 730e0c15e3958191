"""JWT session token provider.

Tokens are HS256-signed with the configured secret. Payload structure:
    {
        "sub": "account-uuid",
        "email": "user@example.com",
        "iat": 1234567000,
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based session token issuer and validator."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @property
    def expire_minutes(self) -> int:
        return self._expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the account it is bound to.

        Args:
            token: The JWT to validate

        Returns:
            TokenUser if valid, None if invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except JWTError:
            return None

        account_id = payload.get("sub")
        email = payload.get("email")

        if not account_id or not email:
            return None

        try:
            return TokenUser(id=UUID(account_id), email=email)
        except ValueError:
            logger.warning("Token subject is not a UUID: %r", account_id)
            return None

    def create_token(self, user: TokenUser) -> str:
        """
        Create a signed session token for an account.

        Args:
            user: The account to create a token for

        Returns:
            The generated JWT string
        """
        now = datetime.utcnow()
        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
