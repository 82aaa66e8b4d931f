"""API routes package."""

from distributor.routes.content_routes import router as content_router

__all__ = ["content_router"]
