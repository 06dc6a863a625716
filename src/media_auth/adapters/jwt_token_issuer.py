"""Session tokens signed with PyJWT."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from media_auth.services.auth import TokenIssuer


@dataclass
class JwtTokenIssuer(TokenIssuer):
    """HS256 JWT issuer bound to a signing secret."""

    secret: str
    algorithm: str = "HS256"

    def sign(self, claims: dict[str, object], expires_in: timedelta) -> str:
        """Sign the claims with ``iat`` and ``exp`` added."""
        issued_at = datetime.now(tz=UTC)
        payload = {**claims, "iat": issued_at, "exp": issued_at + expires_in}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, object]:
        """Decode a token, raising ``ValueError`` when invalid or expired."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise ValueError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise ValueError(f"Invalid token: {exc}") from exc
