# catalog_api/core/tokens.py
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt, JWTError, ExpiredSignatureError


@dataclass(frozen=True)
class TokenValid:
    """Verified token; `claims` carries the admin identity."""

    claims: dict[str, Any]


@dataclass(frozen=True)
class TokenInvalid:
    """Rejected token with a short, log-friendly reason."""

    reason: str


TokenResult = TokenValid | TokenInvalid


class TokenService:
    """
    Issue and verify signed, time-limited admin bearer tokens.

    Tokens are HS256 JWTs with `iat` / `exp` claims. There is no
    server-side revocation: a token stays valid until it expires.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=24)):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, identity: dict[str, Any], now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            **identity,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> TokenResult:
        """
        Check signature and expiry.

        Never raises; absent, malformed, tampered or expired tokens
        produce TokenInvalid.
        """
        if not token:
            return TokenInvalid("missing token")
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            return TokenInvalid("token expired")
        except JWTError:
            return TokenInvalid("invalid signature or malformed token")
        return TokenValid(claims)
