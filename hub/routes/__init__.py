"""API routes package."""

from hub.routes.file_routes import router as file_router
from hub.routes.frontend_routes import router as frontend_router
from hub.routes.message_routes import router as message_router
from hub.routes.system_routes import router as system_router

__all__ = ["file_router", "frontend_router", "message_router", "system_router"]
