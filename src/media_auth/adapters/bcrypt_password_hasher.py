"""Password hashing with bcrypt."""

from dataclasses import dataclass

import bcrypt

from media_auth.services.auth import PasswordHasher


@dataclass
class BcryptPasswordHasher(PasswordHasher):
    """bcrypt hasher with a configurable work factor."""

    rounds: int = 10

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, digest: str) -> bool:
        """Constant-time check of a password against a bcrypt digest."""
        try:
            return bcrypt.checkpw(password.encode(), digest.encode())
        except (ValueError, TypeError):
            return False
