from datetime import date

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from taskportal.core.errors import NotFound, ValidationFailed
from taskportal.core.security import SessionClaims
from taskportal.models.task import Task
from taskportal.services.access import Action, authorize, is_allowed
from taskportal.utils.timezone import day_bounds, start_of_day, today_local


def _require_name(task_name: str | None) -> str:
    name = (task_name or "").strip()
    if not name:
        raise ValidationFailed("Task name is required")
    return name


def _get_task(s: Session, task_id: int) -> Task:
    task = s.execute(select(Task).where(Task.id == task_id)).scalar_one_or_none()
    if task is None:
        raise NotFound("Task not found")
    return task


def list_tasks(s: Session, session: SessionClaims, day: date | None = None, user_id: int | None = None) -> list[Task]:
    q = select(Task).options(selectinload(Task.user)).order_by(Task.created_at.asc(), Task.id.asc())

    if is_allowed(session, Action.READ_ALL_TASKS):
        if user_id is not None:
            q = q.where(Task.user_id == user_id)
    else:
        q = q.where(Task.user_id == session.user_id)

    if day is not None:
        start, end = day_bounds(day)
        q = q.where(Task.date >= start, Task.date < end)

    return list(s.execute(q).scalars().all())


def count_tasks_for_day(s: Session, user_id: int, day: date) -> int:
    start, end = day_bounds(day)
    return s.execute(
        select(func.count(Task.id)).where(
            Task.user_id == user_id,
            Task.date >= start,
            Task.date < end,
        )
    ).scalar_one()


def tasks_for_day(s: Session, user_id: int, day: date) -> list[Task]:
    start, end = day_bounds(day)
    q = (
        select(Task)
        .where(Task.user_id == user_id, Task.date >= start, Task.date < end)
        .order_by(Task.created_at.asc(), Task.id.asc())
    )
    return list(s.execute(q).scalars().all())


def create_task(
    s: Session,
    user_id: int,
    task_name: str | None,
    day: date | None = None,
    plan: str | None = None,
    result: str | None = None,
) -> Task:
    task = Task(
        date=start_of_day(day or today_local()),
        task_name=_require_name(task_name),
        plan=plan or "",
        result=result or "",
        user_id=user_id,
    )
    s.add(task)
    s.commit()
    s.refresh(task)
    return task


def update_task(
    s: Session,
    session: SessionClaims,
    task_id: int,
    task_name: str | None = None,
    plan: str | None = None,
    result: str | None = None,
) -> Task:
    task = _get_task(s, task_id)
    authorize(session, Action.MUTATE_TASK, task)

    if task_name is not None:
        task.task_name = _require_name(task_name)
    if plan is not None:
        task.plan = plan
    if result is not None:
        task.result = result

    s.add(task)
    s.commit()
    s.refresh(task)
    return task


def delete_task(s: Session, session: SessionClaims, task_id: int) -> None:
    task = _get_task(s, task_id)
    authorize(session, Action.MUTATE_TASK, task)
    s.delete(task)
    s.commit()
