from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    """External user shape. password_hash is intentionally absent."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


class AuthTokenModel(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserRead
