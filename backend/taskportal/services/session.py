from datetime import datetime, timedelta, timezone

from fastapi import Request, Response

from taskportal.core.config import settings
from taskportal.core.security import SessionClaims, TokenCodec


class SessionManager:
    """Carries the signed session token in a cookie.

    Nothing is stored server-side, so a session lives until its token
    expires or the signing secret changes.
    """

    def __init__(
        self,
        codec: TokenCodec,
        cookie_name: str = "session",
        ttl: timedelta = timedelta(hours=24),
        secure: bool = True,
    ):
        self.codec = codec
        self.cookie_name = cookie_name
        self.ttl = ttl
        self.secure = secure

    def create_session(
        self,
        response: Response,
        user_id: int,
        username: str,
        role: str,
        now: datetime | None = None,
    ) -> SessionClaims:
        now = now or datetime.now(timezone.utc)
        claims = SessionClaims(user_id=user_id, username=username, role=role, expires_at=now + self.ttl)
        token = self.codec.encode(claims, now=now)
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=int(self.ttl.total_seconds()),
            expires=claims.expires_at,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )
        return claims

    def get_session(self, request: Request) -> SessionClaims | None:
        return self.codec.decode(request.cookies.get(self.cookie_name))

    def delete_session(self, response: Response) -> None:
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )


def build_session_manager(codec: TokenCodec) -> SessionManager:
    return SessionManager(
        codec,
        cookie_name=settings.session_cookie_name,
        ttl=timedelta(hours=settings.session_ttl_hours),
        secure=settings.environment != "development",
    )
