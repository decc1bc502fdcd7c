"""
WebApp Cart Router

Cart page and add-to-cart endpoints. Each handler works on a CartStore
rehydrated for the caller's cart session (see deps.get_cart_store). Store
calls hit the snapshot backend synchronously, so handlers run them in a
worker thread.

Response format:
- Amounts as floats plus a formatted display string
- toasts: notifications raised while handling the request
"""
import asyncio

from fastapi import APIRouter, HTTPException, Depends

from storefront.cart import CartStore
from storefront.config import STORE_CURRENCY
from storefront.errors import ERROR_PRODUCT_NOT_FOUND, ERROR_PRODUCT_OUT_OF_STOCK
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.money import format_money, to_float
from storefront.services.models import public_image_url
from storefront.services.notifications import ToastCenter
from storefront.services.repositories import ProductRepository
from storefront.db import SUPABASE_URL
from ..deps import get_cart_store, get_product_repository
from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(tags=["webapp-cart"])


def _format_cart_response(store: CartStore) -> dict:
    cart = store.cart
    toasts = store.notifier.active() if isinstance(store.notifier, ToastCenter) else []

    return {
        "items": [
            {
                "product_id": item.product_id,
                "name": item.name,
                "image_url": item.image_url,
                "quantity": item.quantity,
                "unit_price": to_float(item.unit_price),
                "line_total": to_float(item.line_total),
                "line_total_display": format_money(item.line_total, STORE_CURRENCY),
            }
            for item in cart.items
        ],
        "count": cart.count,
        "total": to_float(cart.total),
        "total_display": format_money(cart.total, STORE_CURRENCY),
        "currency": STORE_CURRENCY,
        "toasts": [toast.to_dict() for toast in toasts],
    }


@router.get("/cart")
async def get_webapp_cart(store: CartStore = Depends(get_cart_store)):
    """Get the session's cart."""
    return _format_cart_response(store)


@router.post("/cart/add")
async def add_to_cart(
    request: AddToCartRequest,
    store: CartStore = Depends(get_cart_store),
    products: ProductRepository = Depends(get_product_repository),
):
    """Add a product, capping the cart's quantity at the product's stock."""
    try:
        product = await products.get_by_id(request.product_id)
    except Exception as e:
        logger.error(f"Product lookup failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to add item to cart")

    if not product:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    in_cart = next((item.quantity for item in store.items if item.product_id == product.id), 0)
    allowed = product.stock - in_cart
    if allowed <= 0:
        raise HTTPException(status_code=400, detail=ERROR_PRODUCT_OUT_OF_STOCK)

    quantity = min(request.quantity, allowed)
    if quantity < request.quantity:
        logger.info(
            f"Capped add of {sanitize_id_for_logging(product.id)} "
            f"from {request.quantity} to {quantity} (stock {product.stock})"
        )

    try:
        await asyncio.to_thread(
            store.add,
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            image_url=public_image_url(product.image_url, SUPABASE_URL),
            quantity=quantity,
        )
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))

    return _format_cart_response(store)


@router.patch("/cart/item")
async def update_cart_item(
    request: UpdateCartItemRequest,
    store: CartStore = Depends(get_cart_store),
    products: ProductRepository = Depends(get_product_repository),
):
    """Change a line's quantity by delta (the page's +/- buttons)."""
    delta = request.delta
    current = next((item for item in store.items if item.product_id == request.product_id), None)

    if current is not None and delta > 0:
        try:
            product = await products.get_by_id(request.product_id)
        except Exception as e:
            logger.warning(f"Stock check skipped for {sanitize_id_for_logging(request.product_id)}: {e}")
            product = None
        if product is not None:
            delta = min(delta, max(product.stock - current.quantity, 0))

    if delta != 0:
        await asyncio.to_thread(store.update_quantity, request.product_id, delta)

    return _format_cart_response(store)


@router.delete("/cart/item")
async def remove_cart_item(product_id: str, store: CartStore = Depends(get_cart_store)):
    """Remove a line from the cart."""
    await asyncio.to_thread(store.remove, product_id)
    return _format_cart_response(store)


@router.delete("/cart")
async def clear_cart(store: CartStore = Depends(get_cart_store)):
    """Empty the cart and erase its snapshot."""
    await asyncio.to_thread(store.clear)
    return _format_cart_response(store)


@router.post("/cart/checkout")
async def checkout_cart(store: CartStore = Depends(get_cart_store)):
    """
    Check out the cart.

    Local-only by default: the cart is cleared and the page is told to
    navigate to `redirect_to`. No payment is taken.
    """
    result = await asyncio.to_thread(store.checkout)
    response = _format_cart_response(store)
    response["checkout"] = result.to_dict()
    return response
