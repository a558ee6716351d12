from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from taskportal.core.errors import NotFound, UsernameTaken
from taskportal.core.security import SessionClaims, hash_password, verify_password
from taskportal.db.base import Base
from taskportal.models.audit_log import AuditLog
from taskportal.models.daily_report import DailyReport
from taskportal.models.task import Task
from taskportal.models.user import User
from taskportal.services import staff as staff_service
from taskportal.services.reports import submit_report
from taskportal.services.tasks import create_task


@pytest.fixture()
def session():
    eng = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(eng)
    Session = sessionmaker(bind=eng, autoflush=False, autocommit=False, future=True)
    s = Session()
    try:
        yield s
    finally:
        s.close()
        eng.dispose()


@pytest.fixture()
def admin(session):
    u = User(username="admin", password_hash=hash_password("admin123"), role="admin", position=None)
    session.add(u)
    session.commit()
    return SessionClaims(
        user_id=u.id,
        username=u.username,
        role="admin",
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )


def _user_count(session) -> int:
    return len(session.execute(select(User.id)).all())


def test_create_staff_hashes_password_and_forces_role(session, admin):
    u = staff_service.create_staff(session, admin, "alice", "secret1", "media_buyer")

    assert u.role == "staff"
    assert u.position == "media_buyer"
    assert u.password_hash != "secret1"
    assert verify_password("secret1", u.password_hash)
    assert u.created_at is not None


def test_duplicate_username_is_rejected_without_new_row(session, admin):
    staff_service.create_staff(session, admin, "alice", "secret1", "media_buyer")
    before = _user_count(session)

    with pytest.raises(UsernameTaken):
        staff_service.create_staff(session, admin, "alice", "other12", "graphic_design")
    with pytest.raises(UsernameTaken):
        staff_service.create_staff(session, admin, "admin", "other12", "graphic_design")

    assert _user_count(session) == before


def test_list_staff_excludes_admins(session, admin):
    staff_service.create_staff(session, admin, "zoe", "secret1", "media_buyer")
    staff_service.create_staff(session, admin, "alice", "secret1", "project_manager")

    assert [u.username for u in staff_service.list_staff(session)] == ["alice", "zoe"]


def test_update_staff_changes_fields_and_keeps_password_when_omitted(session, admin):
    u = staff_service.create_staff(session, admin, "alice", "secret1", "media_buyer")
    old_hash = u.password_hash

    out = staff_service.update_staff(session, admin, u.id, "alice2", "graphic_design")

    assert out.username == "alice2"
    assert out.position == "graphic_design"
    assert out.password_hash == old_hash


def test_update_staff_rehashes_new_password(session, admin):
    u = staff_service.create_staff(session, admin, "alice", "secret1", "media_buyer")

    out = staff_service.update_staff(session, admin, u.id, "alice", "media_buyer", password="newpass1")

    assert verify_password("newpass1", out.password_hash)
    assert not verify_password("secret1", out.password_hash)


def test_update_staff_rejects_username_of_another_user(session, admin):
    staff_service.create_staff(session, admin, "alice", "secret1", "media_buyer")
    bob = staff_service.create_staff(session, admin, "bob", "secret1", "media_buyer")

    with pytest.raises(UsernameTaken):
        staff_service.update_staff(session, admin, bob.id, "alice", "media_buyer")


def test_update_or_delete_unknown_or_admin_is_not_found(session, admin):
    with pytest.raises(NotFound):
        staff_service.update_staff(session, admin, 999, "ghost", "media_buyer")
    with pytest.raises(NotFound):
        staff_service.delete_staff(session, admin, admin.user_id)


def test_delete_staff_removes_tasks_and_reports(session, admin):
    u = staff_service.create_staff(session, admin, "alice", "secret1", "media_buyer")
    uid = u.id
    me = SessionClaims(user_id=uid, username="alice", role="staff", expires_at=admin.expires_at)
    create_task(session, uid, "Write copy", day=date(2024, 6, 1))
    submit_report(session, me, date(2024, 6, 1), now=datetime(2024, 6, 1, 18, 0))

    staff_service.delete_staff(session, admin, uid)

    assert session.execute(select(User).where(User.id == uid)).scalar_one_or_none() is None
    assert session.execute(select(Task).where(Task.user_id == uid)).all() == []
    assert session.execute(select(DailyReport).where(DailyReport.user_id == uid)).all() == []


def test_staff_changes_are_audited(session, admin):
    u = staff_service.create_staff(session, admin, "alice", "secret1", "media_buyer")
    uid = u.id
    staff_service.update_staff(session, admin, uid, "alice", "graphic_design")
    staff_service.delete_staff(session, admin, uid)

    rows = session.execute(select(AuditLog).where(AuditLog.entity_type == "user").order_by(AuditLog.id)).scalars().all()

    assert [r.action for r in rows] == ["staff.create", "staff.update", "staff.delete"]
    assert {r.username for r in rows} == {"admin"}
    assert rows[1].details == {"position": ["media_buyer", "graphic_design"]}


def test_concurrent_rename_to_taken_username_is_rejected(session, admin, monkeypatch):
    staff_service.create_staff(session, admin, "alice", "secret1", "media_buyer")
    bob_id = staff_service.create_staff(session, admin, "bob", "secret1", "media_buyer").id

    # the other rename committed after this request checked availability
    monkeypatch.setattr(staff_service, "_username_taken", lambda *a, **k: False)

    with pytest.raises(UsernameTaken):
        staff_service.update_staff(session, admin, bob_id, "alice", "graphic_design")

    names = sorted(session.execute(select(User.username).where(User.role == "staff")).scalars().all())
    assert names == ["alice", "bob"]
    assert session.execute(select(AuditLog).where(AuditLog.action == "staff.update")).all() == []
