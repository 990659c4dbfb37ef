"""API Routes for gridbase."""

from gridbase.infrastructure.api.routes.tables_router import router as tables_router

__all__ = [
    "tables_router",
]
