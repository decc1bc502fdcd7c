"""
Storefront Core Module

This package contains the cart subsystem and its collaborators:
- cart: snapshot-persisted shopping cart store
- db: Database clients (Supabase + Redis)
- services: money helpers, toast notifications, repositories
- routers: FastAPI routes for the product and cart pages

Note: Imports are lazy so `import storefront` stays cheap; the cart
package itself imports storefront.db and with it the Supabase and
Upstash clients.
"""

__all__ = [
    "CartStore",
    "get_supabase",
    "get_supabase_sync",
    "get_redis_sync",
]


def __getattr__(name):
    """Lazy attribute access for clean module loading."""
    if name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    if name == "get_supabase":
        from storefront.db import get_supabase
        return get_supabase
    if name == "get_supabase_sync":
        from storefront.db import get_supabase_sync
        return get_supabase_sync
    if name == "get_redis_sync":
        from storefront.db import get_redis_sync
        return get_redis_sync
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
