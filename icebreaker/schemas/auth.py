# icebreaker/schemas/auth.py
from pydantic import BaseModel, ConfigDict


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    username: str | None = None


class LoginRequest(BaseModel):
    username: str
    password: str


class AdminPublic(BaseModel):

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)
