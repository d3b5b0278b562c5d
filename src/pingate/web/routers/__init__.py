from pingate.web.routers.auth import router as auth_router
from pingate.web.routers.metadata import router as metadata_router

__all__ = [
    "auth_router",
    "metadata_router",
]
