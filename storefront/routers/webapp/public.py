"""
WebApp Public Router

Product lookup for the product-detail page.
"""
from fastapi import APIRouter, HTTPException, Depends

from storefront.config import STORE_CURRENCY
from storefront.db import SUPABASE_URL
from storefront.errors import ERROR_PRODUCT_NOT_FOUND
from storefront.logging import get_logger
from storefront.services.money import format_money, to_float
from storefront.services.models import public_image_url
from storefront.services.repositories import ProductRepository
from ..deps import get_product_repository

logger = get_logger(__name__)

router = APIRouter(tags=["webapp-public"])


@router.get("/products/{product_id}")
async def get_webapp_product(product_id: str, products: ProductRepository = Depends(get_product_repository)):
    """Get a product with its stock, as shown next to the add-to-cart button."""
    try:
        product = await products.get_by_id(product_id)
    except Exception as e:
        logger.error(f"Product lookup failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to load product")

    if not product:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "category": product.category,
        "price": to_float(product.price),
        "price_display": format_money(product.price, STORE_CURRENCY),
        "image_url": public_image_url(product.image_url, SUPABASE_URL),
        "stock": product.stock,
        "in_stock": product.in_stock,
        "seller_id": product.seller_id,
    }
