"""API routers."""

from app.routers.auth import router as auth_router
from app.routers.categories import router as categories_router
from app.routers.records import router as records_router
from app.routers.users import router as users_router

__all__ = ["auth_router", "users_router", "categories_router", "records_router"]
