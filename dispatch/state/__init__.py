"""State management modules."""

from dispatch.state.manager import StateManager
from dispatch.state.redis_repositories import (
    RedisOrderRepository,
    RedisStockRepository,
    RedisUserRepository,
)
from dispatch.state.repositories import (
    InMemoryOrderRepository,
    InMemoryStockRepository,
    InMemoryUserRepository,
    OrderRepository,
    StockRepository,
    UserRepository,
)

__all__ = [
    "StateManager",
    "OrderRepository",
    "UserRepository",
    "StockRepository",
    "InMemoryOrderRepository",
    "InMemoryUserRepository",
    "InMemoryStockRepository",
    "RedisOrderRepository",
    "RedisUserRepository",
    "RedisStockRepository",
]
