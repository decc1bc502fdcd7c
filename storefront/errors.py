"""
Cart errors and shared error messages.

Message constants keep router/store strings in one place; the exception
classes describe the failure modes the cart store recovers from.
"""

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_PRODUCT_OUT_OF_STOCK = "Product out of stock"
ERROR_PRODUCT_UNAVAILABLE = "Product is not available for order"

# Cart errors
ERROR_INVALID_QUANTITY = "quantity must be a positive integer"
ERROR_INVALID_PRODUCT_ID = "product_id must be a non-empty string"
ERROR_INVALID_PRICE = "unit_price must be a non-negative number"
ERROR_INVALID_NAME = "name must be a string"
ERROR_INVALID_IMAGE_URL = "image_url must be a string or None"
ERROR_CHECKOUT_FAILED = "Checkout failed, your cart was kept"

# Generic errors
ERROR_INVALID_REQUEST = "Invalid request"
ERROR_INTERNAL = "Internal server error"


class CartError(Exception):
    """Base class for cart subsystem errors."""


class PersistenceUnavailable(CartError):
    """Snapshot storage could not be read or written (quota, outage, not configured)."""


class MalformedSnapshot(CartError):
    """Persisted cart value is not valid JSON or not a list of line items."""


class OrderRecordingFailed(CartError):
    """The order recorder could not store the order at checkout."""
