from typing import Optional
from pydantic import BaseModel, Field, field_validator


def _normalize_email(value: str) -> str:
    value = (value or "").strip().lower()
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValueError("Please enter a valid email address")
    return value


class SignUpRequest(BaseModel):
    email: str = Field(max_length=255)
    password: str = Field(min_length=6, max_length=128)
    name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, pattern=r"^[0-9]{10}$")

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _normalize_email(value)


class SignInRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _normalize_email(value)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class PasswordResetRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return _normalize_email(value)


class PasswordUpdateRequest(BaseModel):
    password: str = Field(min_length=6, max_length=128)
    reset_token: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, pattern=r"^[0-9]{10}$")
    address: Optional[str] = None
