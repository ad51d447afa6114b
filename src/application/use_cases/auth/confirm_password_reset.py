from __future__ import annotations

from uuid import UUID

from src.application.errors import AuthError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.auth.sign_up import validate_password
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher


async def execute(
    *,
    uow: UnitOfWork,
    token: str,
    new_password: str,
    jwt_service: JWTService,
    password_hasher: PasswordHasher,
) -> None:
    validate_password(new_password)
    claims = jwt_service.decode_reset(token)
    try:
        user_id = UUID(str(claims.get("sub")))
    except ValueError as exc:
        raise AuthError("Invalid reset token") from exc
    user = await uow.users.get(user_id)
    if not user or not user.is_active:
        raise AuthError("Invalid reset token")
    if claims.get("pwd") != PasswordHasher.fingerprint(user.hashed_password):
        raise AuthError("Reset token already used")
    await uow.users.update_password(user.id, password_hasher.hash(new_password))
    await uow.commit()
