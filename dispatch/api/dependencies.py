"""Dependencies shared by the API routes."""

from uuid import UUID

from fastapi import Depends, Header

from dispatch.config import get_settings
from dispatch.services.order_service import OrderService
from dispatch.services.stock_service import StockService
from dispatch.services.user_service import UserService
from dispatch.state.manager import get_state_manager
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

Repositories = tuple[OrderRepository, UserRepository, StockRepository]

# Process-wide repositories for the in-memory backend
_memory_repositories: Repositories | None = None


def get_memory_repositories() -> Repositories:
    """Get the process-wide in-memory repositories."""
    global _memory_repositories
    if _memory_repositories is None:
        _memory_repositories = (
            InMemoryOrderRepository(),
            InMemoryUserRepository(),
            InMemoryStockRepository(),
        )
    return _memory_repositories


async def get_repositories() -> Repositories:
    """Repositories for the configured storage backend."""
    settings = get_settings()

    if settings.storage_backend == "redis":
        state_manager = await get_state_manager()
        return (
            RedisOrderRepository(state_manager),
            RedisUserRepository(state_manager),
            RedisStockRepository(state_manager),
        )

    return get_memory_repositories()


async def get_order_service(repositories: Repositories = Depends(get_repositories)) -> OrderService:
    """Order service over the configured repositories."""
    orders, users, stock = repositories
    return OrderService(orders, users, stock)


async def get_stock_service(repositories: Repositories = Depends(get_repositories)) -> StockService:
    """Stock service over the configured repositories."""
    _, users, stock = repositories
    return StockService(users, stock)


async def get_user_service(repositories: Repositories = Depends(get_repositories)) -> UserService:
    """User service over the configured repositories."""
    _, users, _ = repositories
    return UserService(users)


async def get_actor_id(x_actor_id: UUID = Header(...)) -> UUID:
    """Acting user id, supplied by the upstream auth layer."""
    return x_actor_id
