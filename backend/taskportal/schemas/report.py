from datetime import date as date_type, datetime

from pydantic import BaseModel, field_validator

from taskportal.schemas.task import TaskOut
from taskportal.schemas.user import UserSummary


class ReportSubmit(BaseModel):
    date: date_type | None = None


class ReportOut(BaseModel):
    id: int
    date: date_type
    user_id: int
    submitted: bool
    submitted_at: datetime | None
    created_at: datetime

    @field_validator("date", mode="before")
    @classmethod
    def day_only(cls, v):
        if isinstance(v, datetime):
            return v.date()
        return v

    class Config:
        from_attributes = True


class AdminReportOut(ReportOut):
    user: UserSummary
    tasks: list[TaskOut] = []


class WithdrawOut(BaseModel):
    message: str = "Report deleted successfully"
    id: int
    date: date_type
