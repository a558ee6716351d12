"""Authorization decisions for every protected operation."""
from enum import Enum

from taskportal.core.errors import Unauthorized
from taskportal.core.security import SessionClaims


class Action(str, Enum):
    MANAGE_STAFF = "staff.manage"
    READ_AUDIT = "audit.read"
    READ_ALL_TASKS = "task.read_all"
    MUTATE_TASK = "task.mutate"
    READ_ALL_REPORTS = "report.read_all"


def is_allowed(session: SessionClaims, action: Action, resource=None) -> bool:
    if session.is_admin:
        return True
    if action is Action.MUTATE_TASK:
        return resource is not None and getattr(resource, "user_id", None) == session.user_id
    return False


def authorize(session: SessionClaims, action: Action, resource=None) -> None:
    if not is_allowed(session, action, resource):
        raise Unauthorized()
