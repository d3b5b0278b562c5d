from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from pingate.app import App, get_package_version
from pingate.config import Config
from pingate.errors import UserError
from pingate.utils import now
from pingate.web.error_handlers import general_exception_handler, request_validation_error_handler, user_error_handler
from pingate.web.middleware import RequestContextMiddleware
from pingate.web.openapi import set_custom_openapi
from pingate.web.routers import auth_router, metadata_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="pingate API",
        lifespan=lifespan,
        openapi_tags=[],
    )

    # Dependencies read these; set before the first request, lifespan or not
    app.state.app = app_instance
    app.state.config = config

    app.add_middleware(RequestContextMiddleware)

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health check endpoint (at root level, not versioned)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {
            "status": "healthy",
            "service": "pingate",
            "version": get_package_version(),
            "timestamp": now().isoformat(),
        }

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(metadata_router, prefix="/api/v1")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
