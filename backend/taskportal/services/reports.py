"""Daily report submission.

A (day, user) pair either has no report or a submitted one. Submitting
again refreshes ``submitted_at``; withdrawing deletes the row.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from taskportal.core.errors import DeadlinePassed, NoTasksToSubmit, NotFound, ReportConflict
from taskportal.core.security import SessionClaims
from taskportal.models.daily_report import DailyReport
from taskportal.models.task import Task
from taskportal.services.audit import log_event
from taskportal.services.tasks import count_tasks_for_day, tasks_for_day
from taskportal.utils.timezone import END_OF_DAY, REPORT_ANCHOR, day_bounds, now_local

logger = logging.getLogger(__name__)

GRACE_PERIOD = timedelta(hours=24)


def submission_deadline(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY) + GRACE_PERIOD


def report_anchor(day: date) -> datetime:
    return datetime.combine(day, REPORT_ANCHOR)


def find_report(s: Session, user_id: int, day: date) -> DailyReport | None:
    start, end = day_bounds(day)
    return (
        s.execute(
            select(DailyReport).where(
                DailyReport.user_id == user_id,
                DailyReport.date >= start,
                DailyReport.date < end,
            )
        )
        .scalars()
        .first()
    )


def submit_report(s: Session, actor: SessionClaims, day: date, now: datetime | None = None) -> DailyReport:
    now = now or now_local()
    user_id = actor.user_id

    if now > submission_deadline(day):
        raise DeadlinePassed()

    if count_tasks_for_day(s, user_id, day) == 0:
        raise NoTasksToSubmit()

    report = find_report(s, user_id, day)
    resubmitted = report is not None
    if report is None:
        report = DailyReport(date=report_anchor(day), user_id=user_id)
    report.submitted = True
    report.submitted_at = now
    s.add(report)

    try:
        s.flush()
        log_event(
            s,
            actor,
            action="report.submit",
            entity_type="daily_report",
            entity_id=report.id,
            details={"date": day.isoformat(), "resubmitted": resubmitted},
        )
        s.commit()
    except IntegrityError as e:
        s.rollback()
        logger.warning("concurrent report submission user_id=%s date=%s", user_id, day, exc_info=e)
        raise ReportConflict()

    s.refresh(report)
    logger.info("report submitted user_id=%s date=%s resubmitted=%s", user_id, day, resubmitted)
    return report


def withdraw_report(s: Session, actor: SessionClaims, day: date) -> dict:
    report = find_report(s, actor.user_id, day)
    if report is None:
        raise NotFound("Report not found")

    out = {"id": report.id, "date": report.date.date()}
    s.delete(report)
    log_event(
        s,
        actor,
        action="report.withdraw",
        entity_type="daily_report",
        entity_id=out["id"],
        details={"date": day.isoformat(), "submitted_at": report.submitted_at.isoformat() if report.submitted_at else None},
    )
    s.commit()

    logger.info("report withdrawn user_id=%s date=%s", actor.user_id, day)
    return out


def list_reports_for_admin(s: Session, day: date | None = None) -> list[tuple[DailyReport, list[Task]]]:
    q = (
        select(DailyReport)
        .options(selectinload(DailyReport.user))
        .order_by(DailyReport.submitted_at.desc(), DailyReport.id.desc())
    )
    if day is not None:
        start, end = day_bounds(day)
        q = q.where(DailyReport.date >= start, DailyReport.date < end)

    reports = s.execute(q).scalars().all()
    return [(r, tasks_for_day(s, r.user_id, r.date.date())) for r in reports]


def list_reports_for_user(s: Session, user_id: int, day: date | None = None) -> list[DailyReport]:
    q = select(DailyReport).where(DailyReport.user_id == user_id).order_by(DailyReport.date.desc())
    if day is not None:
        start, end = day_bounds(day)
        q = q.where(DailyReport.date >= start, DailyReport.date < end)
    return list(s.execute(q).scalars().all())
