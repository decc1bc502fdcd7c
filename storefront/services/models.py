"""Database Models - Pydantic models for the storefront tables the cart reads."""
from decimal import Decimal
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator

from storefront.config import PRODUCT_IMAGE_BUCKET
from storefront.services.money import to_decimal as _to_decimal


def public_image_url(image_url: Optional[str], supabase_url: str) -> Optional[str]:
    """
    Resolve a product image reference to a URL a browser can load.

    Sellers' uploads are stored as object paths in the product bucket;
    absolute URLs are passed through unchanged.
    """
    if not image_url:
        return None
    if image_url.startswith("http://") or image_url.startswith("https://"):
        return image_url
    if not supabase_url:
        return image_url
    base = supabase_url.rstrip("/")
    return f"{base}/storage/v1/object/public/{PRODUCT_IMAGE_BUCKET}/{image_url.lstrip('/')}"


class Product(BaseModel):
    """Product row as returned by the products table."""
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    stock: int = 0
    category: Optional[str] = None
    image_url: Optional[str] = None
    seller_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    @field_validator("stock", mode="before")
    @classmethod
    def default_stock(cls, v):
        return 0 if v is None else v

    @property
    def in_stock(self) -> bool:
        return self.stock > 0
