# foodhub/models/__init__.py
from .user import User, UserRole
from .restaurant import Restaurant, Dish
from .order import Order, OrderItem, OrderStatus

# Export all models
__all__ = [
    "User",
    "UserRole",
    "Restaurant",
    "Dish",
    "Order",
    "OrderItem",
    "OrderStatus",
]
