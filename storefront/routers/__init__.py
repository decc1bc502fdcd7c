"""FastAPI routers for the storefront pages."""
from .webapp import router as webapp_router

__all__ = ["webapp_router"]
