import logging

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskportal.core.errors import NotFound, UsernameTaken
from taskportal.core.security import SessionClaims, hash_password
from taskportal.models.daily_report import DailyReport
from taskportal.models.task import Task
from taskportal.models.user import User
from taskportal.services.audit import log_event

logger = logging.getLogger(__name__)


def _get_staff(s: Session, staff_id: int) -> User:
    user = s.execute(select(User).where(User.id == staff_id)).scalar_one_or_none()
    if user is None or user.role != "staff":
        raise NotFound("Staff user not found")
    return user


def _username_taken(s: Session, username: str, exclude_id: int | None = None) -> bool:
    q = select(User.id).where(User.username == username)
    if exclude_id is not None:
        q = q.where(User.id != exclude_id)
    return s.execute(q).first() is not None


def list_staff(s: Session) -> list[User]:
    return list(s.execute(select(User).where(User.role == "staff").order_by(User.username.asc())).scalars().all())


def create_staff(s: Session, actor: SessionClaims, username: str, password: str, position: str) -> User:
    if _username_taken(s, username):
        raise UsernameTaken()

    user = User(username=username, password_hash=hash_password(password), role="staff", position=position)
    s.add(user)
    try:
        s.flush()
    except IntegrityError:
        s.rollback()
        raise UsernameTaken()
    log_event(
        s,
        actor,
        action="staff.create",
        entity_type="user",
        entity_id=user.id,
        details={"username": username, "position": position},
    )
    s.commit()
    s.refresh(user)
    logger.info("staff created username=%s by=%s", username, actor.username)
    return user


def update_staff(
    s: Session,
    actor: SessionClaims,
    staff_id: int,
    username: str,
    position: str,
    password: str | None = None,
) -> User:
    user = _get_staff(s, staff_id)
    if _username_taken(s, username, exclude_id=staff_id):
        raise UsernameTaken()

    changes = {}
    if user.username != username:
        changes["username"] = [user.username, username]
    if user.position != position:
        changes["position"] = [user.position, position]
    if password:
        changes["password"] = "changed"

    user.username = username
    user.position = position
    if password:
        user.password_hash = hash_password(password)

    s.add(user)
    log_event(s, actor, action="staff.update", entity_type="user", entity_id=user.id, details=changes)
    try:
        s.commit()
    except IntegrityError:
        s.rollback()
        raise UsernameTaken()
    s.refresh(user)
    logger.info("staff updated id=%s by=%s", staff_id, actor.username)
    return user


def delete_staff(s: Session, actor: SessionClaims, staff_id: int) -> None:
    user = _get_staff(s, staff_id)
    details = {"username": user.username, "position": user.position}

    s.execute(delete(Task).where(Task.user_id == staff_id))
    s.execute(delete(DailyReport).where(DailyReport.user_id == staff_id))
    s.delete(user)
    log_event(s, actor, action="staff.delete", entity_type="user", entity_id=staff_id, details=details)
    s.commit()
    logger.info("staff deleted id=%s by=%s", staff_id, actor.username)
