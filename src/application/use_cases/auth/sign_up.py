from __future__ import annotations

from dataclasses import dataclass

from src.application.errors import ConflictError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.auth.get_me import UserProfile, profile_for
from src.domain.models.farm import AreaUnit, Farm
from src.domain.models.user import User
from src.domain.value_objects.role import Role
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher

MIN_PASSWORD_LENGTH = 6


@dataclass(slots=True)
class SignUpInput:
    email: str
    password: str
    farm_name: str
    display_name: str | None = None
    farm_location: str = ""
    farm_size: float = 0.0
    farm_units: str = AreaUnit.HECTARES.value


@dataclass(slots=True)
class SessionResult:
    access_token: str
    refresh_token: str
    token_type: str
    profile: UserProfile


def validate_password(password: str) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must have at least {MIN_PASSWORD_LENGTH} characters")


def issue_session(jwt_service: JWTService, user: User) -> SessionResult:
    claims = {"role": user.role.value, "farm_ids": [str(f) for f in user.farm_ids]}
    return SessionResult(
        access_token=jwt_service.create_access_token(subject=user.id, extra_claims=claims),
        refresh_token=jwt_service.create_refresh_token(subject=user.id),
        token_type="bearer",
        profile=profile_for(user),
    )


async def execute(
    *,
    uow: UnitOfWork,
    payload: SignUpInput,
    password_hasher: PasswordHasher,
    jwt_service: JWTService,
) -> SessionResult:
    """Register a user as the admin of a new farm."""
    email = payload.email.strip().lower()
    validate_password(payload.password)
    if not payload.farm_name or not payload.farm_name.strip():
        raise ValidationError("farm_name is required")
    if payload.farm_size < 0:
        raise ValidationError("farm_size must be non-negative")
    if await uow.users.get_by_email(email):
        raise ConflictError("Email already registered")
    try:
        farm = Farm.create(
            name=payload.farm_name.strip(),
            location=payload.farm_location,
            size=payload.farm_size,
            units=payload.farm_units,
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    await uow.farms.add(farm)
    user = User.create(
        email=email,
        hashed_password=password_hasher.hash(payload.password),
        display_name=payload.display_name,
        role=Role.ADMIN,
        farm_ids=[farm.id],
    )
    created = await uow.users.add(user)
    await uow.users.add_farm(created.id, farm.id)
    await uow.commit()
    created.farm_ids = [farm.id]
    return issue_session(jwt_service, created)
