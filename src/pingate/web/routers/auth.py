from datetime import datetime

from fastapi import APIRouter, Response
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pingate.core.modules.session.models import AuthToken
from pingate.errors import AuthenticationError
from pingate.web.deps import TOKEN_COOKIE, AppDep, AuthDep, ClientAddressDep, ConfigDep, OptionalAuthTokenDep
from pingate.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VerifyPinRequest(BaseModel):
    """PIN verification request."""

    pin: str = Field(..., description="4-digit supervisor PIN")


class VerifyPinResponse(CamelModel):
    """Issued session token."""

    token: str = Field(..., description="Bearer token for subsequent requests")
    expires_at: datetime = Field(..., description="Moment the token stops being accepted")


class TokenRequest(BaseModel):
    """Request carrying a session token."""

    token: str | None = Field(default=None, description="Session token")


class ValidateTokenResponse(CamelModel):
    """Token validation result. Expiry fields are only present for valid tokens."""

    valid: bool
    expires_at: datetime | None = None
    remaining_ms: int | None = None


class LogoutResponse(BaseModel):
    success: bool = True


class SessionView(CamelModel):
    """Current session details (the token itself is never echoed)."""

    issued_at: datetime
    expires_at: datetime
    remaining_ms: int
    origin_address: str


@router.post(
    "/auth/verify-pin",
    summary="Verify supervisor PIN",
    description="Verify the 4-digit supervisor PIN to receive a session token. Attempts are rate-limited per address.",
    operation_id="verifyPin",
    responses={
        200: {"description": "PIN accepted, session created"},
        400: {"model": ErrorResponse, "description": "PIN is not 4 digits"},
        401: {"model": ErrorResponse, "description": "Invalid PIN"},
        429: {"model": ErrorResponse, "description": "Too many attempts"},
    },
)
async def verify_pin(
    pin_data: VerifyPinRequest, app: AppDep, config: ConfigDep, client_address: ClientAddressDep, response: Response
) -> VerifyPinResponse:
    issued = await app.verify_pin(pin_data.pin, client_address)

    # Set cookie for browser-based clients
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=issued.token,
        httponly=True,
        samesite="lax",
        secure=config.cookie_secure,
        max_age=int(config.token_ttl.total_seconds()),
    )

    return VerifyPinResponse(token=issued.token, expires_at=issued.expires_at)


@router.post(
    "/auth/validate-token",
    summary="Validate session token",
    description="Report whether a token is live. Unknown, expired and missing tokens all return valid=false with status 200.",
    operation_id="validateToken",
    response_model_exclude_none=True,
)
async def validate_token(token_data: TokenRequest, app: AppDep) -> ValidateTokenResponse:
    if not token_data.token:
        return ValidateTokenResponse(valid=False)

    validation = await app.validate_token(AuthToken(token_data.token))
    if not validation.valid or validation.session is None or validation.remaining is None:
        return ValidateTokenResponse(valid=False)

    return ValidateTokenResponse(
        valid=True,
        expires_at=validation.session.expires_at,
        remaining_ms=int(validation.remaining.total_seconds() * 1000),
    )


@router.post(
    "/auth/logout",
    summary="End session",
    description=(
        "Invalidate a session token taken from the body, else from the Bearer header or cookie. "
        "Always succeeds, whether or not the token existed."
    ),
    operation_id="logout",
)
async def logout(
    token_data: TokenRequest, app: AppDep, presented_token: OptionalAuthTokenDep, response: Response
) -> LogoutResponse:
    # Body token first, then the bearer header or cookie the client authenticates with
    auth_token = AuthToken(token_data.token) if token_data.token else presented_token
    if auth_token:
        await app.logout(auth_token)
    response.delete_cookie(TOKEN_COOKIE)
    return LogoutResponse()


@router.get(
    "/auth/session",
    summary="Get current session",
    description="Get details of the session behind the presented token.",
    operation_id="getCurrentSession",
    responses={
        200: {"description": "Current session"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_session(auth: AuthDep) -> SessionView:
    session, remaining = auth.session, auth.remaining
    if session is None or remaining is None:
        raise AuthenticationError
    return SessionView(
        issued_at=session.issued_at,
        expires_at=session.expires_at,
        remaining_ms=int(remaining.total_seconds() * 1000),
        origin_address=session.origin_address,
    )
