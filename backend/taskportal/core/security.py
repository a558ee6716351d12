from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

from taskportal.core.config import settings

pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(p: str) -> str:
    if p is None:
        raise ValueError("password is required")
    p = str(p)
    b = p.encode("utf-8")
    if len(b) > 72:
        p = b[:72].decode("utf-8", errors="ignore")
    return pwd.hash(p)


def verify_password(p: str, hashed: str) -> bool:
    if p is None or hashed is None:
        return False
    p = str(p)
    b = p.encode("utf-8")
    if len(b) > 72:
        p = b[:72].decode("utf-8", errors="ignore")
    return pwd.verify(p, hashed)


@dataclass(frozen=True)
class SessionClaims:
    user_id: int
    username: str
    role: str
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class TokenCodec:
    """Signs and verifies session tokens.

    The secret is passed in explicitly so tests can run with fixed keys;
    the application builds a single instance from settings at startup.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(days=1)):
        if not secret:
            raise ValueError("secret is required")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    def encode(self, claims: SessionClaims, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "user_id": claims.user_id,
            "username": claims.username,
            "role": claims.role,
            "expires_at": claims.expires_at.astimezone(timezone.utc).isoformat(),
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str | None) -> SessionClaims | None:
        """Return the claims carried by ``token`` or None when it is unusable.

        Missing, tampered, malformed and expired tokens all yield None.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
            claims = SessionClaims(
                user_id=int(payload["user_id"]),
                username=str(payload["username"]),
                role=str(payload["role"]),
                expires_at=datetime.fromisoformat(payload["expires_at"]),
            )
        except (jwt.PyJWTError, KeyError, TypeError, ValueError):
            return None
        if claims.expires_at.tzinfo is None or claims.expires_at <= datetime.now(timezone.utc):
            return None
        return claims


def build_token_codec() -> TokenCodec:
    return TokenCodec(
        settings.jwt_secret,
        algorithm=settings.jwt_alg,
        ttl=timedelta(hours=settings.session_ttl_hours),
    )
