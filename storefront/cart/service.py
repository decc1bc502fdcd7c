"""Cart store: the in-memory cart mirrored to a snapshot after every mutation."""
from dataclasses import replace
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from storefront.config import CART_STORAGE_KEY
from storefront.errors import (
    ERROR_CHECKOUT_FAILED,
    ERROR_INVALID_IMAGE_URL,
    ERROR_INVALID_NAME,
    ERROR_INVALID_PRICE,
    ERROR_INVALID_PRODUCT_ID,
    ERROR_INVALID_QUANTITY,
    MalformedSnapshot,
    OrderRecordingFailed,
)
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.services.money import to_decimal
from storefront.services.notifications import Notifier, ToastCenter, ToastType
from .checkout import (
    CHECKOUT_REDIRECT,
    CHECKOUT_SUCCESS_MESSAGE,
    CheckoutResult,
    CheckoutStatus,
    OrderRecorder,
)
from .models import Cart, CartLineItem
from .storage import SnapshotStorage, MemoryStorage, get_default_storage

logger = get_logger(__name__)

CountObserver = Callable[[int], None]


class CartStore:
    """
    Owns one shopping cart and its persisted snapshot.

    Features:
    - Merge on add: one line per product, first add keeps name/price/image
    - Full snapshot written after every mutation, key deleted on clear
    - Corrupt or missing snapshots load as an empty cart
    - Storage failures switch the store to memory-only instead of raising
    - Count observers and toast notifications

    All operations are synchronous and nothing yields between changing the
    in-memory cart and writing the snapshot. Two stores sharing a key do not
    coordinate: whichever persists last wins.
    """

    def __init__(
        self,
        storage: Optional[SnapshotStorage] = None,
        key: str = CART_STORAGE_KEY,
        notifier: Optional[Notifier] = None,
        order_recorder: Optional[OrderRecorder] = None,
    ):
        self.storage = storage if storage is not None else MemoryStorage()
        self.key = key
        self.notifier = notifier if notifier is not None else ToastCenter()
        self.order_recorder = order_recorder
        self._cart = Cart()
        self._persistent = True
        self._observers: List[CountObserver] = []
        self._last_count = 0

    # ==================== STATE ====================

    @property
    def cart(self) -> Cart:
        """Copy of the current cart."""
        return Cart(items=[replace(item) for item in self._cart.items])

    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        return tuple(self.cart.items)

    @property
    def count(self) -> int:
        return self._cart.count

    @property
    def persistent(self) -> bool:
        """False once a storage failure switched the store to memory-only."""
        return self._persistent

    def subscribe(self, observer: CountObserver) -> Callable[[], None]:
        """Call `observer(count)` whenever the item count changes. Returns an unsubscribe function."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # ==================== OPERATIONS ====================

    def load(self) -> Cart:
        """Rehydrate from the snapshot. Never raises."""
        if self._persistent:
            raw = None
            try:
                raw = self.storage.get(self.key)
            except Exception as e:
                self._degrade(e)

            if raw is not None:
                try:
                    self._cart = Cart.from_snapshot(raw)
                except MalformedSnapshot as e:
                    # Left in place; the next persist overwrites it
                    logger.warning(f"Ignoring malformed cart snapshot under {self.key!r}: {e}")
                    self._cart = Cart()
            elif self._persistent:
                self._cart = Cart()

        self._emit_count()
        return self.cart

    def add(
        self,
        product_id: str,
        name: str,
        unit_price,
        image_url: Optional[str] = None,
        quantity: int = 1,
    ) -> Cart:
        """Add units of a product, merging into an existing line."""
        if not product_id or not isinstance(product_id, str):
            raise ValueError(ERROR_INVALID_PRODUCT_ID)
        if not isinstance(name, str):
            raise ValueError(ERROR_INVALID_NAME)
        if image_url is not None and not isinstance(image_url, str):
            raise ValueError(ERROR_INVALID_IMAGE_URL)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError(ERROR_INVALID_QUANTITY)
        if (
            isinstance(unit_price, bool)
            or not isinstance(unit_price, (int, float, Decimal))
            or not to_decimal(unit_price).is_finite()
            or to_decimal(unit_price) < 0
        ):
            raise ValueError(ERROR_INVALID_PRICE)

        existing = self._cart.find(product_id)
        if existing:
            existing.quantity += quantity
        else:
            self._cart.items.append(
                CartLineItem(
                    product_id=product_id,
                    name=name,
                    unit_price=to_decimal(unit_price),
                    quantity=quantity,
                    image_url=image_url,
                )
            )

        logger.debug(f"Added {quantity} x {sanitize_id_for_logging(product_id)} to cart")
        self._persist()
        self._emit_count()
        self._notify(f"{name} added to cart!")
        return self.cart

    def update_quantity(self, product_id: str, delta: int) -> Cart:
        """
        Change a line's quantity by `delta`; a result <= 0 removes the line.

        Unknown products are ignored. There is no stock cap here: callers
        that know the stock limit the delta themselves.
        """
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValueError("delta must be an integer")

        item = self._cart.find(product_id)
        if item is None:
            return self.cart

        new_quantity = item.quantity + delta
        if new_quantity <= 0:
            return self.remove(product_id)

        item.quantity = new_quantity
        self._persist()
        self._emit_count()
        return self.cart

    def remove(self, product_id: str) -> Cart:
        """Drop a line; unknown products are ignored."""
        remaining = [item for item in self._cart.items if item.product_id != product_id]
        if len(remaining) == len(self._cart.items):
            return self.cart

        self._cart.items = remaining
        logger.debug(f"Removed {sanitize_id_for_logging(product_id)} from cart")
        self._persist()
        self._emit_count()
        return self.cart

    def total(self) -> Decimal:
        return self._cart.total

    def clear(self) -> None:
        """Empty the cart and delete the snapshot key."""
        self._cart = Cart()
        if self._persistent:
            try:
                self.storage.delete(self.key)
            except Exception as e:
                self._degrade(e)
        self._emit_count()

    def checkout(self) -> CheckoutResult:
        """
        Complete the purchase locally: clear the cart, show a success toast
        and tell the caller where to go next.

        With an order recorder configured the order is stored first; if that
        fails the cart is kept and the result is FAILED.
        """
        if self._cart.is_empty:
            return CheckoutResult(status=CheckoutStatus.EMPTY)

        total = self._cart.total
        item_count = self._cart.count
        order_id = None

        if self.order_recorder is not None:
            try:
                order_id = self.order_recorder.record(self.cart)
            except OrderRecordingFailed as e:
                logger.warning(f"Checkout kept the cart, order not recorded: {e}")
                self._notify(ERROR_CHECKOUT_FAILED, ToastType.ERROR)
                return CheckoutResult(
                    status=CheckoutStatus.FAILED,
                    total=total,
                    item_count=item_count,
                    error=str(e),
                )

        was_persistent = self._persistent
        self.clear()
        if was_persistent and not self._persistent:
            logger.error(
                f"Checkout completed but the snapshot under {self.key!r} was not deleted; "
                f"the purchased cart may reappear on the next load"
            )
        self._notify(CHECKOUT_SUCCESS_MESSAGE)
        logger.info(f"Checkout completed: {item_count} items, total {total}")
        return CheckoutResult(
            status=CheckoutStatus.COMPLETED,
            total=total,
            item_count=item_count,
            order_id=order_id,
            redirect_to=CHECKOUT_REDIRECT,
        )

    # ==================== INTERNALS ====================

    def _persist(self) -> None:
        if not self._persistent:
            return
        try:
            self.storage.set(self.key, self._cart.to_snapshot())
        except Exception as e:
            self._degrade(e)

    def _degrade(self, error: Exception) -> None:
        self._persistent = False
        logger.warning(
            f"Cart storage unavailable ({type(error).__name__}: {error}); "
            f"cart under {self.key!r} is now memory-only"
        )

    def _emit_count(self) -> None:
        count = self._cart.count
        if count == self._last_count:
            return
        self._last_count = count
        for observer in list(self._observers):
            try:
                observer(count)
            except Exception as e:
                logger.warning(f"Cart count observer failed: {e}", exc_info=True)

    def _notify(self, message: str, toast_type: ToastType = ToastType.SUCCESS) -> None:
        try:
            self.notifier.show(message, toast_type)
        except Exception as e:
            logger.warning(f"Toast not shown: {e}")


# Process-wide store for single-user contexts (CLI, scripts)
_cart_store: Optional[CartStore] = None


def get_cart_store() -> CartStore:
    """Get the process CartStore singleton, rehydrated on first use."""
    global _cart_store
    if _cart_store is None:
        _cart_store = CartStore(storage=get_default_storage())
        _cart_store.load()
    return _cart_store
