from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Cookie, Depends, Header, HTTPException, Response

from smarttube.api.deps import (
    get_login_local_use_case,
    get_logout_session_use_case,
    get_refresh_session_use_case,
    get_register_user_use_case,
    get_request_password_reset_use_case,
    get_reset_password_use_case,
)
from smarttube.api.errors import to_http_error
from smarttube.api.schemas.auth import (
    AuthTokenResponse,
    AuthUserResponse,
    ForgotPasswordRequest,
    LoginRequest,
    OkResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
)
from smarttube.application.dto.auth import (
    AuthTokensOutput,
    LoginLocalInput,
    LogoutInput,
    RefreshSessionInput,
    RegisterUserInput,
    RequestPasswordResetInput,
    ResetPasswordInput,
)
from smarttube.application.use_cases.login_local import LoginLocalUseCase
from smarttube.application.use_cases.logout_session import LogoutSessionUseCase
from smarttube.application.use_cases.refresh_session import RefreshSessionUseCase
from smarttube.application.use_cases.register_user import RegisterUserUseCase
from smarttube.application.use_cases.request_password_reset import RequestPasswordResetUseCase
from smarttube.application.use_cases.reset_password import ResetPasswordUseCase
from smarttube.domain.exceptions import DomainError
from smarttube.shared.config import get_settings


router = APIRouter()

REFRESH_COOKIE_NAME = "refresh_token"
REFRESH_COOKIE_PATH = "/v1/auth"
RESET_REQUESTED_MESSAGE = "If an account exists for this email, a reset link has been sent."


def _set_refresh_cookie(response: Response, refresh_token: str, max_age_seconds: int) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=refresh_token,
        httponly=True,
        samesite="lax",
        secure=get_settings().refresh_cookie_secure,
        max_age=max_age_seconds,
        path=REFRESH_COOKIE_PATH,
    )


def _cookie_max_age_seconds(refresh_expires_at: datetime) -> int:
    now = datetime.now(timezone.utc)
    return max(int((refresh_expires_at - now).total_seconds()), 0)


def _token_response(response: Response, output: AuthTokensOutput) -> AuthTokenResponse:
    _set_refresh_cookie(
        response,
        output.refresh_token,
        max_age_seconds=_cookie_max_age_seconds(output.refresh_expires_at),
    )
    return AuthTokenResponse(
        access_token=output.access_token,
        access_expires_at=output.access_expires_at,
        refresh_expires_at=output.refresh_expires_at,
        user=AuthUserResponse.model_validate(output.user),
    )


@router.post("/v1/auth/register", response_model=RegisterResponse, status_code=201)
def register_user(
    req: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    try:
        output = use_case.execute(
            RegisterUserInput(
                full_name=req.full_name,
                email=req.email,
                password=req.password,
            )
        )
    except (DomainError, ValueError) as exc:
        raise to_http_error(exc) from exc

    return RegisterResponse(user=AuthUserResponse.model_validate(output.user))


@router.post("/v1/auth/login", response_model=AuthTokenResponse)
def login_local(
    req: LoginRequest,
    response: Response,
    user_agent: str | None = Header(default=None),
    x_forwarded_for: str | None = Header(default=None),
    use_case: LoginLocalUseCase = Depends(get_login_local_use_case),
):
    try:
        output = use_case.execute(
            LoginLocalInput(
                email=req.email,
                password=req.password,
                user_agent=user_agent,
                ip=x_forwarded_for,
            )
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc

    return _token_response(response, output)


@router.post("/v1/auth/refresh", response_model=AuthTokenResponse)
def refresh_auth(
    response: Response,
    refresh_token_cookie: str | None = Cookie(default=None, alias=REFRESH_COOKIE_NAME),
    user_agent: str | None = Header(default=None),
    x_forwarded_for: str | None = Header(default=None),
    use_case: RefreshSessionUseCase = Depends(get_refresh_session_use_case),
):
    if not refresh_token_cookie:
        raise HTTPException(status_code=401, detail="Missing refresh token cookie.")

    try:
        output = use_case.execute(
            RefreshSessionInput(
                refresh_token=refresh_token_cookie,
                user_agent=user_agent,
                ip=x_forwarded_for,
            )
        )
    except DomainError as exc:
        raise to_http_error(exc) from exc

    return _token_response(response, output)


@router.post("/v1/auth/logout", response_model=OkResponse)
def logout_auth(
    response: Response,
    refresh_token_cookie: str | None = Cookie(default=None, alias=REFRESH_COOKIE_NAME),
    use_case: LogoutSessionUseCase = Depends(get_logout_session_use_case),
):
    if refresh_token_cookie:
        use_case.execute(LogoutInput(refresh_token=refresh_token_cookie))
    response.delete_cookie(key=REFRESH_COOKIE_NAME, path=REFRESH_COOKIE_PATH)
    return OkResponse(ok=True)


@router.post("/v1/auth/forgot-password", response_model=OkResponse)
def forgot_password(
    req: ForgotPasswordRequest,
    use_case: RequestPasswordResetUseCase = Depends(get_request_password_reset_use_case),
):
    try:
        use_case.execute(RequestPasswordResetInput(email=req.email))
    except DomainError as exc:
        raise to_http_error(exc) from exc
    return OkResponse(ok=True, message=RESET_REQUESTED_MESSAGE)


@router.post("/v1/auth/reset-password", response_model=OkResponse)
def reset_password(
    req: ResetPasswordRequest,
    use_case: ResetPasswordUseCase = Depends(get_reset_password_use_case),
):
    try:
        use_case.execute(ResetPasswordInput(token=req.token, new_password=req.new_password))
    except (DomainError, ValueError) as exc:
        raise to_http_error(exc) from exc
    return OkResponse(ok=True, message="Password updated.")
