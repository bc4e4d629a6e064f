"""Data models for the delivery dispatch core."""

from dispatch.models.order import Order, OrderDraft, OrderStatus
from dispatch.models.stock import StockDraft, StockItem, StockUpdate
from dispatch.models.user import User, UserRole

__all__ = [
    # Order
    "Order",
    "OrderDraft",
    "OrderStatus",
    # Stock
    "StockItem",
    "StockDraft",
    "StockUpdate",
    # User
    "User",
    "UserRole",
]
