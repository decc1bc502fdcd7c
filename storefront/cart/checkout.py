"""Checkout result types and the optional order-recording hook."""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from storefront.services.money import to_float

CHECKOUT_SUCCESS_MESSAGE = "Order placed successfully! Thank you for your purchase."
CHECKOUT_REDIRECT = "/"


class CheckoutStatus(str, Enum):
    COMPLETED = "completed"
    EMPTY = "empty"  # nothing to check out
    FAILED = "failed"  # order recorder refused; cart kept


@dataclass
class CheckoutResult:
    status: CheckoutStatus
    total: Decimal = Decimal("0")
    item_count: int = 0
    order_id: Optional[str] = None
    redirect_to: Optional[str] = None
    error: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.status == CheckoutStatus.COMPLETED

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "total": to_float(self.total),
            "item_count": self.item_count,
            "order_id": self.order_id,
            "redirect_to": self.redirect_to,
            "error": self.error,
        }


class OrderRecorder:
    """
    Stores a placed order somewhere durable.

    Checkout is local-only unless one of these is given to the cart store.
    Implementations raise OrderRecordingFailed when the order could not be
    stored; the cart is then left untouched.
    """

    def record(self, cart) -> str:
        """Persist the order for `cart` and return its id."""
        raise NotImplementedError
