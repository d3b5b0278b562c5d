"""Metadata endpoints for exposing system information."""

from fastapi import APIRouter

from pingate.web.deps import AppDep, AuthDep
from pingate.web.openapi import ErrorResponse

router = APIRouter(tags=["metadata"])


@router.get(
    "/metadata/version",
    summary="Get version information",
    description="Returns build and version information including package version, git commit hash, commit date, and build time.",
    operation_id="getVersion",
    responses={
        200: {"description": "Version and build information"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_version(app: AppDep, _: AuthDep) -> dict[str, str]:
    """Get version information."""
    return await app.get_version()
