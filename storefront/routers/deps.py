"""
Shared Dependencies for Routers

Every request builds its own CartStore and rehydrates it from the
session's snapshot, the way a page re-reads the cart when it mounts.
"""

import re
import uuid
from typing import Optional

from fastapi import Depends, Request, Response

from storefront.cart import CartStore, OrderRecorder, SnapshotStorage, get_default_storage
from storefront.config import CART_COOKIE_NAME, CHECKOUT_RECORD_ORDERS
from storefront.db import RedisKeys, get_supabase, get_supabase_sync
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.notifications import ToastCenter
from storefront.services.repositories import OrderRepository, ProductRepository

logger = get_logger(__name__)

_SESSION_RE = re.compile(r"^[0-9a-f]{32}$")
SESSION_COOKIE_MAX_AGE = 365 * 24 * 3600


def get_cart_session(request: Request, response: Response) -> str:
    """
    Read the cart session cookie, minting one on first visit.

    The session only scopes the cart snapshot; it is not authentication.
    """
    session_id = request.cookies.get(CART_COOKIE_NAME, "")
    if _SESSION_RE.match(session_id):
        return session_id

    session_id = uuid.uuid4().hex
    logger.debug(f"New cart session {sanitize_id_for_logging(session_id)}")
    response.set_cookie(
        CART_COOKIE_NAME,
        session_id,
        max_age=SESSION_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )
    return session_id


def get_snapshot_storage() -> SnapshotStorage:
    return get_default_storage()


def get_order_recorder() -> Optional[OrderRecorder]:
    """Order recording at checkout is opt-in (CHECKOUT_RECORD_ORDERS)."""
    if not CHECKOUT_RECORD_ORDERS:
        return None
    try:
        return OrderRepository(get_supabase_sync())
    except ValueError as e:
        logger.warning(f"Order recording enabled but Supabase is not configured: {e}")
        return None


def get_cart_store(
    session_id: str = Depends(get_cart_session),
    storage: SnapshotStorage = Depends(get_snapshot_storage),
    order_recorder: Optional[OrderRecorder] = Depends(get_order_recorder),
) -> CartStore:
    """Per-request store for the session. Sync, so FastAPI runs load() in its threadpool."""
    store = CartStore(
        storage=storage,
        key=RedisKeys.cart_key(session_id),
        notifier=ToastCenter(),
        order_recorder=order_recorder,
    )
    store.load()
    return store


async def get_product_repository() -> ProductRepository:
    return ProductRepository(await get_supabase())
