from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response

from src.application.errors import AuthError
from src.application.use_cases.auth import (
    confirm_password_reset,
    get_me,
    request_password_reset,
    sign_in,
    sign_up,
)
from src.config.settings import Settings
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer
from src.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_email_renderer,
    get_email_service,
    get_jwt_service,
    get_password_hasher,
    get_uow,
)
from src.interfaces.http.schemas.auth import (
    ProfileResponse,
    RefreshRequest,
    ResetPasswordConfirmRequest,
    ResetPasswordRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    StatusResponse,
)

router = APIRouter(prefix="", tags=["auth"])
logger = logging.getLogger(__name__)

REFRESH_COOKIE = "refresh_token"


def _profile(profile: get_me.UserProfile) -> ProfileResponse:
    return ProfileResponse(
        user_id=profile.user_id,
        email=profile.email,
        display_name=profile.display_name,
        role=profile.role,
        farm_ids=profile.farm_ids,
    )


def _wants_refresh_in_body(request: Request) -> bool:
    return (
        request.headers.get("X-Mobile-Client") == "1"
        or request.headers.get("X-Return-Refresh") == "1"
    )


def _session_response(
    result: sign_up.SessionResult, request: Request, response: Response, settings: Settings
) -> SessionResponse:
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=result.refresh_token,
        httponly=True,
        samesite=settings.cookie_samesite,
        secure=settings.cookie_secure,
        path="/",
    )
    return SessionResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        refresh_token=result.refresh_token if _wants_refresh_in_body(request) else None,
        profile=_profile(result.profile),
    )


@router.post("/auth/signup", response_model=SessionResponse, status_code=201)
async def signup_endpoint(
    payload: SignUpRequest,
    request: Request,
    response: Response,
    uow=Depends(get_uow),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    jwt_service: JWTService = Depends(get_jwt_service),
    settings: Settings = Depends(get_app_settings),
) -> SessionResponse:
    result = await sign_up.execute(
        uow=uow,
        payload=sign_up.SignUpInput(
            email=payload.email,
            password=payload.password,
            farm_name=payload.farm_name,
            display_name=payload.display_name,
            farm_location=payload.farm_location,
            farm_size=payload.farm_size,
            farm_units=payload.farm_units.value,
        ),
        password_hasher=password_hasher,
        jwt_service=jwt_service,
    )
    logger.info("New farm registered by %s", result.profile.email)
    return _session_response(result, request, response, settings)


@router.post("/auth/signin", response_model=SessionResponse)
async def signin_endpoint(
    payload: SignInRequest,
    request: Request,
    response: Response,
    uow=Depends(get_uow),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    jwt_service: JWTService = Depends(get_jwt_service),
    settings: Settings = Depends(get_app_settings),
) -> SessionResponse:
    result = await sign_in.execute(
        uow=uow,
        payload=sign_in.SignInInput(email=payload.email, password=payload.password),
        password_hasher=password_hasher,
        jwt_service=jwt_service,
    )
    return _session_response(result, request, response, settings)


@router.post("/auth/refresh", response_model=SessionResponse)
async def refresh_endpoint(
    request: Request,
    response: Response,
    payload: RefreshRequest | None = None,
    uow=Depends(get_uow),
    jwt_service: JWTService = Depends(get_jwt_service),
    settings: Settings = Depends(get_app_settings),
) -> SessionResponse:
    # Cookie for browsers, JSON body for mobile clients
    token = request.cookies.get(REFRESH_COOKIE) or (payload.refresh_token if payload else None)
    if not token:
        raise AuthError("Missing refresh token")
    claims = jwt_service.decode_refresh(token)
    try:
        user_id = UUID(str(claims.get("sub")))
    except ValueError as exc:
        raise AuthError("Invalid refresh token") from exc
    user = await uow.users.get(user_id)
    if not user or not user.is_active:
        raise AuthError("Inactive or missing user")
    result = sign_up.issue_session(jwt_service, user)
    return _session_response(result, request, response, settings)


@router.post("/auth/signout", response_model=StatusResponse)
async def signout_endpoint(response: Response) -> StatusResponse:
    response.delete_cookie(key=REFRESH_COOKIE, path="/")
    return StatusResponse(status="ok")


@router.post("/auth/reset-password", response_model=StatusResponse, status_code=202)
async def reset_password_endpoint(
    payload: ResetPasswordRequest,
    uow=Depends(get_uow),
    jwt_service: JWTService = Depends(get_jwt_service),
    email_service: EmailService = Depends(get_email_service),
    renderer: EmailTemplateRenderer = Depends(get_email_renderer),
    settings: Settings = Depends(get_app_settings),
) -> StatusResponse:
    """Always accepted, so callers cannot probe which emails are registered."""
    await request_password_reset.execute(
        uow=uow,
        email=payload.email,
        jwt_service=jwt_service,
        email_service=email_service,
        renderer=renderer,
        settings=settings,
    )
    return StatusResponse(status="accepted")


@router.post("/auth/reset-password/confirm", response_model=StatusResponse)
async def reset_password_confirm_endpoint(
    payload: ResetPasswordConfirmRequest,
    uow=Depends(get_uow),
    jwt_service: JWTService = Depends(get_jwt_service),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> StatusResponse:
    await confirm_password_reset.execute(
        uow=uow,
        token=payload.token,
        new_password=payload.new_password,
        jwt_service=jwt_service,
        password_hasher=password_hasher,
    )
    return StatusResponse(status="password_changed")


@router.get("/me", response_model=ProfileResponse)
async def read_me(
    context: AuthContext = Depends(get_auth_context), uow=Depends(get_uow)
) -> ProfileResponse:
    profile = await get_me.execute(uow=uow, user_id=context.user_id, email=context.email)
    return _profile(profile)
