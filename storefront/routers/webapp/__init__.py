"""WebApp API Router.

Endpoints backing the product-detail and cart pages, combined under
the /api/webapp prefix.
"""

from fastapi import APIRouter

from .cart import router as cart_router
from .public import router as public_router

router = APIRouter(prefix="/api/webapp", tags=["webapp"])

router.include_router(public_router)
router.include_router(cart_router)

__all__ = ["router"]
