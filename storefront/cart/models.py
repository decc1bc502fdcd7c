"""Cart models and the persisted snapshot format."""
import json
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional

from storefront.errors import MalformedSnapshot
from storefront.services.money import to_decimal, multiply

SNAPSHOT_VERSION = 1


def _reject_constant(name: str):
    raise ValueError(f"{name} is not a valid price or quantity")


def _dump_json(value: Any) -> str:
    """Compact JSON with Decimals written as exact numbers."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return "{" + ",".join(f"{json.dumps(k)}:{_dump_json(v)}" for k, v in value.items()) + "}"
    if isinstance(value, list):
        return "[" + ",".join(_dump_json(v) for v in value) + "]"
    return json.dumps(value)


@dataclass
class CartLineItem:
    """One product in the cart with the quantity requested."""
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    image_url: Optional[str] = None

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)

    @property
    def line_total(self) -> Decimal:
        return multiply(self.unit_price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to the persisted item shape."""
        data = {
            "id": self.product_id,
            "name": self.name,
            "price": self.unit_price,
            "quantity": self.quantity,
        }
        if self.image_url is not None:
            data["image_url"] = self.image_url
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "CartLineItem":
        """
        Build a line item from a persisted item, validating its shape.

        Raises:
            MalformedSnapshot: if a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise MalformedSnapshot(f"line item is {type(data).__name__}, expected object")

        product_id = data.get("id")
        name = data.get("name")
        price = data.get("price")
        quantity = data.get("quantity")
        image_url = data.get("image_url")

        if not isinstance(product_id, str) or not product_id:
            raise MalformedSnapshot("line item id must be a non-empty string")
        if not isinstance(name, str):
            raise MalformedSnapshot(f"line item {product_id!r}: name must be a string")
        # bool is an int subclass; reject it explicitly
        if isinstance(price, bool) or not isinstance(price, (int, float, Decimal)) or price < 0:
            raise MalformedSnapshot(f"line item {product_id!r}: price must be a non-negative number")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise MalformedSnapshot(f"line item {product_id!r}: quantity must be an integer >= 1")
        if image_url is not None and not isinstance(image_url, str):
            raise MalformedSnapshot(f"line item {product_id!r}: image_url must be a string")

        return cls(
            product_id=product_id,
            name=name,
            unit_price=to_decimal(price),
            quantity=quantity,
            image_url=image_url,
        )


@dataclass
class Cart:
    """Ordered line items, at most one per product id."""
    items: List[CartLineItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def count(self) -> int:
        """Total number of units in the cart."""
        return sum(item.quantity for item in self.items)

    @property
    def total(self) -> Decimal:
        """Exact sum of unit_price * quantity; no rounding."""
        return sum((item.line_total for item in self.items), Decimal("0"))

    def find(self, product_id: str) -> Optional[CartLineItem]:
        return next((item for item in self.items if item.product_id == product_id), None)

    def to_dict(self) -> dict:
        return {
            "version": SNAPSHOT_VERSION,
            "items": [item.to_dict() for item in self.items],
        }

    def to_snapshot(self) -> str:
        """Serialize the whole cart for storage."""
        return _dump_json(self.to_dict())

    @classmethod
    def from_dict(cls, data: Any) -> "Cart":
        """
        Build a cart from a decoded snapshot.

        Accepts the versioned envelope or a bare list of items (snapshots
        written before the version field existed).

        Raises:
            MalformedSnapshot: on unknown versions, bad items or duplicate ids
        """
        if isinstance(data, dict):
            version = data.get("version")
            if version != SNAPSHOT_VERSION:
                raise MalformedSnapshot(f"unsupported snapshot version {version!r}")
            raw_items = data.get("items")
        else:
            raw_items = data

        if not isinstance(raw_items, list):
            raise MalformedSnapshot(f"snapshot items is {type(raw_items).__name__}, expected array")

        items = [CartLineItem.from_dict(raw) for raw in raw_items]
        seen = set()
        for item in items:
            if item.product_id in seen:
                raise MalformedSnapshot(f"duplicate line item {item.product_id!r}")
            seen.add(item.product_id)
        return cls(items=items)

    @classmethod
    def from_snapshot(cls, raw: str) -> "Cart":
        """
        Parse a stored snapshot string.

        Raises:
            MalformedSnapshot: if the text is not JSON or not a cart
        """
        try:
            # Decimal keeps stored prices exact
            data = json.loads(raw, parse_float=Decimal, parse_constant=_reject_constant)
        except (ValueError, TypeError) as e:
            raise MalformedSnapshot(f"snapshot is not valid JSON: {e}") from e
        return cls.from_dict(data)
