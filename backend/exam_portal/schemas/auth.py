from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from datetime import datetime

from exam_portal.models.user import UserRole, DEFAULT_DEPARTMENT


def _normalize_email(value: str) -> str:
    return value.strip().lower()


class UserRegister(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: UserRole
    department: str = Field(DEFAULT_DEPARTMENT, min_length=1, max_length=255)
    semester: int = Field(1, ge=1)

    @field_validator("email", mode="after")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return _normalize_email(value)


class UserLogin(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="after")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return _normalize_email(value)


class UserResponse(BaseModel):
    """Public view of a user; the password hash is never part of it"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: UserRole
    department: str
    semester: int
    created_at: datetime


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
