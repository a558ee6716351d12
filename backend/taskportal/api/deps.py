from functools import lru_cache

from fastapi import Depends, Request
from taskportal.db.session import SessionLocal
from taskportal.core.errors import Unauthenticated
from taskportal.core.security import SessionClaims, build_token_codec
from taskportal.services.access import Action, authorize
from taskportal.services.session import SessionManager, build_session_manager

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

@lru_cache
def session_manager() -> SessionManager:
    return build_session_manager(build_token_codec())

def optional_session(request: Request, sm: SessionManager = Depends(session_manager)) -> SessionClaims | None:
    return sm.get_session(request)

def current_session(sess: SessionClaims | None = Depends(optional_session)) -> SessionClaims:
    if sess is None:
        raise Unauthenticated()
    return sess

def require(action: Action):
    def _check(sess: SessionClaims = Depends(current_session)) -> SessionClaims:
        authorize(sess, action)
        return sess
    return _check

require_admin = require(Action.MANAGE_STAFF)
