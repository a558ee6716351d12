from pydantic import BaseModel

class LoginIn(BaseModel):
    username: str
    password: str

class SessionOut(BaseModel):
    user_id: int
    username: str
    role: str
    position: str | None = None
