from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from src.domain.models.farm import AreaUnit
from src.domain.value_objects.role import Role


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    farm_name: str = Field(min_length=1)
    display_name: str | None = None
    farm_location: str = ""
    farm_size: float = Field(default=0.0, ge=0)
    farm_units: AreaUnit = AreaUnit.HECTARES


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str | None = None


class ResetPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordConfirmRequest(BaseModel):
    token: str
    new_password: str = Field(min_length=6)


class ProfileResponse(BaseModel):
    user_id: UUID
    email: str
    display_name: str
    role: Role
    farm_ids: list[UUID]


class SessionResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    refresh_token: str | None = None
    profile: ProfileResponse


class StatusResponse(BaseModel):
    status: str
