from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from taskportal.core.errors import Unauthorized
from taskportal.core.security import SessionClaims
from taskportal.services.access import Action, authorize, is_allowed


def _session(user_id: int, role: str) -> SessionClaims:
    return SessionClaims(
        user_id=user_id,
        username=f"user{user_id}",
        role=role,
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )


ADMIN = _session(1, "admin")
STAFF = _session(2, "staff")


@pytest.mark.parametrize("action", list(Action))
def test_admin_is_allowed_everything(action):
    assert is_allowed(ADMIN, action, SimpleNamespace(user_id=99))


@pytest.mark.parametrize(
    "action",
    [Action.MANAGE_STAFF, Action.READ_AUDIT, Action.READ_ALL_TASKS, Action.READ_ALL_REPORTS],
)
def test_staff_denied_privileged_actions(action):
    assert not is_allowed(STAFF, action)
    with pytest.raises(Unauthorized):
        authorize(STAFF, action)


def test_staff_may_mutate_own_task_only():
    assert is_allowed(STAFF, Action.MUTATE_TASK, SimpleNamespace(user_id=2))
    assert not is_allowed(STAFF, Action.MUTATE_TASK, SimpleNamespace(user_id=3))
    assert not is_allowed(STAFF, Action.MUTATE_TASK, None)
