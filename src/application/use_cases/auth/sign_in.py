from __future__ import annotations

from dataclasses import dataclass

from src.application.errors import AuthError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.auth.sign_up import SessionResult, issue_session
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher


@dataclass(slots=True)
class SignInInput:
    email: str
    password: str


async def execute(
    *,
    uow: UnitOfWork,
    payload: SignInInput,
    password_hasher: PasswordHasher,
    jwt_service: JWTService,
) -> SessionResult:
    user = await uow.users.get_by_email(payload.email.strip().lower())
    if not user or not user.is_active:
        raise AuthError("Invalid credentials")
    if not password_hasher.verify(payload.password, user.hashed_password):
        raise AuthError("Invalid credentials")
    return issue_session(jwt_service, user)
