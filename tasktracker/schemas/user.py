from typing import Optional

from pydantic import BaseModel, Field, field_validator


class RegisterRequest(BaseModel):
    """Registration payload.

    Fields are optional here so the auth service can report every missing
    field at once instead of failing on the first one.
    """
    username: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = None

    @field_validator("username", "email", mode="before")
    @classmethod
    def strip_blank(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    # Add other fields you want to expose, but NOT password


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut
