"""
Domain Repositories
"""

from .base import AbstractRepository
from .user_repository import UserRepository
from .product_repository import ProductRepository
from .order_repository import OrderRepository, PaymentRepository

__all__ = [
    "AbstractRepository",
    "UserRepository",
    "ProductRepository",
    "OrderRepository",
    "PaymentRepository",
]
