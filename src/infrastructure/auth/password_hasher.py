"""bcrypt password hashing."""

import bcrypt

from core.config import settings

# bcrypt only reads the first 72 bytes of a secret and rejects longer input.
_BCRYPT_MAX_BYTES = 72


class BcryptPasswordHasher:
    """Password hasher with a fixed bcrypt cost factor."""

    def __init__(self, rounds: int = settings.bcrypt_rounds) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """Constant-time check; malformed stored hashes never match."""
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode("ascii"))
        except ValueError:
            return False

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
