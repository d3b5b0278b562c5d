from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer

from pingate.app import App
from pingate.config import Config
from pingate.core.modules.session.models import AuthToken, TokenValidation
from pingate.errors import AuthenticationError

TOKEN_COOKIE = "token"

# Security schemes
bearer_scheme = HTTPBearer(scheme_name="BearerAuth", auto_error=False)
cookie_scheme = APIKeyCookie(name=TOKEN_COOKIE, scheme_name="TokenCookie", auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


def get_client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def get_optional_auth_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    token_cookie: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> AuthToken | None:
    """Extract the auth token from the Authorization Bearer header or cookie, if any."""

    # Check Bearer token first (preferred)
    if credentials and credentials.scheme.lower() == "bearer" and credentials.credentials:
        return AuthToken(credentials.credentials)

    # Fallback to cookie
    if token_cookie:
        return AuthToken(token_cookie)

    return None


async def get_auth_token(
    auth_token: Annotated[AuthToken | None, Depends(get_optional_auth_token)],
) -> AuthToken:
    if auth_token is None:
        raise AuthenticationError
    return auth_token


async def get_authenticated(
    app: Annotated[App, Depends(get_app)],
    auth_token: Annotated[AuthToken, Depends(get_auth_token)],
) -> TokenValidation:
    """Validate the request token exactly once."""
    return await app.authenticate(auth_token)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
OptionalAuthTokenDep = Annotated[AuthToken | None, Depends(get_optional_auth_token)]
ClientAddressDep = Annotated[str, Depends(get_client_address)]
AuthDep = Annotated[TokenValidation, Depends(get_authenticated)]
