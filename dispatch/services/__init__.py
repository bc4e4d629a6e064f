"""Service modules."""

from dispatch.services.order_service import OrderService
from dispatch.services.stock_service import StockService
from dispatch.services.user_service import UserService

__all__ = ["OrderService", "StockService", "UserService"]
