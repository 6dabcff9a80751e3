"""
Domain Models
"""

from .user import User, UserRole
from .product import Product, ProductCategory
from .order import Order, OrderStatus
from .order_product import OrderProduct
from .payment import Payment, PaymentProvider, PaymentStatus

__all__ = [
    "User",
    "UserRole",
    "Product",
    "ProductCategory",
    "Order",
    "OrderStatus",
    "OrderProduct",
    "Payment",
    "PaymentProvider",
    "PaymentStatus",
]
