"""Order Repository - records checkouts in the orders table."""
from typing import Optional

from storefront.cart.checkout import OrderRecorder
from storefront.cart.models import Cart
from storefront.errors import OrderRecordingFailed
from storefront.logging import get_logger
from storefront.services.money import to_float
from .base import BaseRepository

logger = get_logger(__name__)

ORDER_STATUS_PENDING = "pending"


class OrderRepository(BaseRepository, OrderRecorder):
    """
    Writes one pending `orders` row per cart line (sync client).

    The seller dashboard lists orders per product, so a checkout of three
    lines becomes three rows. The id of the first row is returned as the
    checkout's order id.
    """

    def __init__(self, client, customer_name: Optional[str] = None, customer_email: Optional[str] = None):
        super().__init__(client)
        self.customer_name = customer_name
        self.customer_email = customer_email

    def build_rows(self, cart: Cart) -> list[dict]:
        return [
            {
                "product_id": item.product_id,
                "product_name": item.name,
                "product_price": to_float(item.unit_price),
                "quantity": item.quantity,
                "total": to_float(item.line_total),
                "status": ORDER_STATUS_PENDING,
                "customer_name": self.customer_name,
                "customer_email": self.customer_email,
            }
            for item in cart.items
        ]

    def record(self, cart: Cart) -> str:
        rows = self.build_rows(cart)
        try:
            result = self.client.table("orders").insert(rows).execute()
        except Exception as e:
            logger.error(f"Failed to insert orders: {e}", exc_info=True)
            raise OrderRecordingFailed(f"orders insert failed: {e}") from e

        if not result.data:
            raise OrderRecordingFailed("orders insert returned no rows")

        order_id = str(result.data[0]["id"])
        logger.info(f"Recorded {len(rows)} order rows, first id {order_id}")
        return order_id
