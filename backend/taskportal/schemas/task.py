from datetime import date as date_type, datetime

from pydantic import BaseModel, field_validator

from taskportal.schemas.user import UserSummary


class TaskCreate(BaseModel):
    task_name: str | None = None
    date: date_type | None = None
    plan: str | None = None
    result: str | None = None


class TaskUpdate(BaseModel):
    task_name: str | None = None
    plan: str | None = None
    result: str | None = None


class TaskOut(BaseModel):
    id: int
    date: date_type
    task_name: str
    plan: str
    result: str
    user_id: int
    created_at: datetime
    user: UserSummary | None = None

    @field_validator("date", mode="before")
    @classmethod
    def day_only(cls, v):
        if isinstance(v, datetime):
            return v.date()
        return v

    class Config:
        from_attributes = True
