"""
Repository Pattern for Database Operations

- ProductRepository: product lookups for add-to-cart
- OrderRepository: optional order rows written at checkout
"""
from .product_repo import ProductRepository
from .order_repo import OrderRepository

__all__ = [
    "ProductRepository",
    "OrderRepository",
]
