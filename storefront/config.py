"""Storefront settings read from the environment."""
import os


def _env_int(name: str, default: int) -> int:
    """Read an integer env var, falling back to default on junk values."""
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    try:
        return float(raw) if raw else default
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Cart snapshot
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart")
CART_TTL_SECONDS = _env_int("CART_TTL_SECONDS", 0)  # 0 = keep forever
CART_COOKIE_NAME = os.environ.get("CART_COOKIE_NAME", "cart_session")

# Presentation
STORE_CURRENCY = os.environ.get("STORE_CURRENCY", "USD").upper()
TOAST_DURATION_SECONDS = _env_float("TOAST_DURATION_SECONDS", 3.0)

# Checkout: local-only unless explicitly enabled
CHECKOUT_RECORD_ORDERS = _env_bool("CHECKOUT_RECORD_ORDERS")

# Product images live in this public Supabase storage bucket
PRODUCT_IMAGE_BUCKET = os.environ.get("PRODUCT_IMAGE_BUCKET", "Product")

# Origins allowed to call the API with the cart cookie (comma separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
