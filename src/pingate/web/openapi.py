from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from pingate.app import get_package_version

# Routes that never require a token
PUBLIC_ENDPOINTS = {
    ("GET", "/health"),
    ("POST", "/api/v1/auth/verify-pin"),
    ("POST", "/api/v1/auth/validate-token"),
    ("POST", "/api/v1/auth/logout"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="pingate API",
            version=get_package_version(),
            summary="Supervisor PIN authentication with bearer token sessions",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Bearer token authentication (preferred)",
            },
            "TokenCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": "token",
                "description": "Session token stored in cookie",
            },
        }

        # Apply security globally, public endpoints are cleared below
        openapi_schema["security"] = [
            {"BearerAuth": []},
            {"TokenCookie": []},
        ]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid PIN", "type": "invalid_credential"},
                {"message": "PIN must be exactly 4 digits", "type": "validation_error"},
                {"message": "Authentication required", "type": "authentication_error"},
                {"message": "Too many attempts. Please try again later.", "type": "rate_limited"},
            ]
        }
    }
