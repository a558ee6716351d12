from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Literal

Position = Literal["project_manager", "media_buyer", "graphic_design"]


def _clean_username(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("username is required")
    if len(v) > 64:
        raise ValueError("username too long")
    return v


def _check_password(v: str) -> str:
    v = str(v)
    if len(v) < 6:
        raise ValueError("password must be at least 6 characters")
    return v


class StaffCreate(BaseModel):
    username: str
    password: str
    position: Position

    @field_validator("username")
    @classmethod
    def username_trim(cls, v: str):
        return _clean_username(v)

    @field_validator("password")
    @classmethod
    def password_min(cls, v: str):
        return _check_password(v)


class StaffUpdate(BaseModel):
    username: str
    position: Position
    password: str | None = None

    @field_validator("username")
    @classmethod
    def username_trim(cls, v: str):
        return _clean_username(v)

    @field_validator("password")
    @classmethod
    def password_min(cls, v: str | None):
        # blank means "keep the current password"
        if v is None or v == "":
            return None
        return _check_password(v)


class UserSummary(BaseModel):
    id: int
    username: str
    position: str | None

    class Config:
        from_attributes = True


class StaffOut(BaseModel):
    id: int
    username: str
    role: str
    position: str | None
    created_at: datetime

    class Config:
        from_attributes = True
