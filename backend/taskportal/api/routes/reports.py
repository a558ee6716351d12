from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from taskportal.api.deps import db, current_session
from taskportal.core.errors import ValidationFailed
from taskportal.core.security import SessionClaims
from taskportal.schemas.report import AdminReportOut, ReportOut, ReportSubmit, WithdrawOut
from taskportal.schemas.task import TaskOut
from taskportal.schemas.user import UserSummary
from taskportal.services.access import Action, is_allowed
from taskportal.services import reports as report_service

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("")
def list_reports(
    date: date | None = Query(default=None),
    s: Session = Depends(db),
    sess: SessionClaims = Depends(current_session),
):
    if not is_allowed(sess, Action.READ_ALL_REPORTS):
        return [ReportOut.model_validate(r) for r in report_service.list_reports_for_user(s, sess.user_id, day=date)]

    out = []
    for report, tasks in report_service.list_reports_for_admin(s, day=date):
        base = ReportOut.model_validate(report).model_dump()
        out.append(
            AdminReportOut(
                **base,
                user=UserSummary.model_validate(report.user),
                tasks=[TaskOut.model_validate(t) for t in tasks],
            )
        )
    return out


@router.post("", response_model=ReportOut, status_code=201)
def submit_report(body: ReportSubmit, s: Session = Depends(db), sess: SessionClaims = Depends(current_session)):
    if body.date is None:
        raise ValidationFailed("Date is required")
    return ReportOut.model_validate(report_service.submit_report(s, sess, body.date))


@router.delete("", response_model=WithdrawOut)
def withdraw_report(
    date: date | None = Query(default=None),
    s: Session = Depends(db),
    sess: SessionClaims = Depends(current_session),
):
    if date is None:
        raise ValidationFailed("Date is required")
    return report_service.withdraw_report(s, sess, date)
