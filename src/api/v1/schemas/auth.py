"""Pydantic schemas for registration and sign-in."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator

from api.v1.schemas.profile import ProfileResponse
from domain.entities.profile import STAFF_ROLES, UserRole


class RegisterRequest(BaseModel):
    """Schema for creating an account and its profile."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    full_name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = UserRole.CITIZEN
    department: str | None = Field(None, max_length=255)

    @model_validator(mode="after")
    def department_only_for_staff(self) -> "RegisterRequest":
        if self.role not in STAFF_ROLES:
            self.department = None
        return self


class LoginRequest(BaseModel):
    """Schema for password sign-in with the role the user claims."""

    email: EmailStr
    password: str = Field(..., min_length=1)
    role: UserRole = UserRole.CITIZEN


class SessionResponse(BaseModel):
    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    user_id: UUID


class LoginResponse(BaseModel):
    """Session plus profile; `dashboard` tells the client which view to open."""

    session: SessionResponse
    profile: ProfileResponse
    dashboard: str
