"""Cart package: models, snapshot storage, checkout types and the cart store."""
from .models import CartLineItem, Cart
from .checkout import CheckoutResult, CheckoutStatus, OrderRecorder
from .storage import SnapshotStorage, MemoryStorage, RedisSnapshotStorage, get_default_storage
from .service import CartStore, get_cart_store

__all__ = [
    "CartLineItem",
    "Cart",
    "CheckoutResult",
    "CheckoutStatus",
    "OrderRecorder",
    "SnapshotStorage",
    "MemoryStorage",
    "RedisSnapshotStorage",
    "get_default_storage",
    "CartStore",
    "get_cart_store",
]
