import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from sqlalchemy import select
from taskportal.api.deps import db, current_session, session_manager
from taskportal.core.errors import Unauthenticated
from taskportal.core.security import SessionClaims, verify_password
from taskportal.schemas.auth import LoginIn, SessionOut
from taskportal.models.user import User
from taskportal.services.session import SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=SessionOut)
def login(body: LoginIn, response: Response, s: Session = Depends(db), sm: SessionManager = Depends(session_manager)):
    u = s.execute(select(User).where(User.username == body.username.strip())).scalar_one_or_none()
    if not u or not verify_password(body.password, u.password_hash):
        logger.warning("failed login username=%s", body.username)
        raise Unauthenticated("Invalid username or password")
    sm.create_session(response, u.id, u.username, u.role)
    logger.info("login username=%s role=%s", u.username, u.role)
    return {"user_id": u.id, "username": u.username, "role": u.role, "position": u.position}

@router.post("/logout")
def logout(response: Response, sm: SessionManager = Depends(session_manager)):
    sm.delete_session(response)
    return {"success": True}

@router.get("/me", response_model=SessionOut)
def me(sess: SessionClaims = Depends(current_session), s: Session = Depends(db)):
    position = s.execute(select(User.position).where(User.id == sess.user_id)).scalar_one_or_none()
    return {"user_id": sess.user_id, "username": sess.username, "role": sess.role, "position": position}
