"""Repository contracts and in-memory implementations."""

from typing import Protocol
from uuid import UUID

from dispatch.lifecycle.errors import StaleOrder
from dispatch.models.order import Order, OrderStatus
from dispatch.models.stock import StockItem
from dispatch.models.user import User, UserRole


class OrderRepository(Protocol):
    """Storage for orders."""

    async def fetch_order(self, order_id: UUID) -> Order | None: ...

    async def list_orders(self) -> list[Order]: ...

    async def add(self, order: Order) -> Order: ...

    async def persist(self, order: Order, expected_status: OrderStatus) -> Order:
        """Store ``order`` if the stored status is still ``expected_status``.

        Raises StaleOrder otherwise.
        """
        ...

    async def delete(self, order_id: UUID, expected_status: OrderStatus) -> None:
        """Remove the order if the stored status is still ``expected_status``.

        Raises StaleOrder otherwise.
        """
        ...


class UserRepository(Protocol):
    """Storage for users."""

    async def fetch_user(self, user_id: UUID) -> User | None: ...

    async def list_users(
        self,
        role: UserRole | None = None,
        approved: bool | None = None,
    ) -> list[User]: ...

    async def save(self, user: User) -> User: ...


class StockRepository(Protocol):
    """Storage for seller stock lines."""

    async def fetch_stock_item(self, seller_id: UUID, item_name: str) -> StockItem | None: ...

    async def fetch_stock_item_by_id(self, item_id: UUID) -> StockItem | None: ...

    async def list_stock(self, seller_id: UUID | None = None) -> list[StockItem]: ...

    async def save(self, item: StockItem) -> StockItem: ...


def matches_filter(user: User, role: UserRole | None, approved: bool | None) -> bool:
    """Apply the optional role/approved filter of ``list_users``."""
    if role is not None and user.role != role:
        return False
    if approved is not None and user.approved != approved:
        return False
    return True


class InMemoryOrderRepository:
    """Order storage kept in a dict; snapshots are copied in and out."""

    def __init__(self) -> None:
        self._orders: dict[UUID, Order] = {}

    async def fetch_order(self, order_id: UUID) -> Order | None:
        order = self._orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    async def list_orders(self) -> list[Order]:
        return [order.model_copy(deep=True) for order in self._orders.values()]

    async def add(self, order: Order) -> Order:
        self._orders[order.id] = order.model_copy(deep=True)
        return order

    async def persist(self, order: Order, expected_status: OrderStatus) -> Order:
        stored = self._orders.get(order.id)
        if stored is None or stored.status != expected_status:
            raise StaleOrder(f"Order {order.id} changed since it was read")
        self._orders[order.id] = order.model_copy(deep=True)
        return order

    async def delete(self, order_id: UUID, expected_status: OrderStatus) -> None:
        stored = self._orders.get(order_id)
        if stored is None or stored.status != expected_status:
            raise StaleOrder(f"Order {order_id} changed since it was read")
        del self._orders[order_id]


class InMemoryUserRepository:
    """User storage kept in a dict."""

    def __init__(self) -> None:
        self._users: dict[UUID, User] = {}

    async def fetch_user(self, user_id: UUID) -> User | None:
        return self._users.get(user_id)

    async def list_users(
        self,
        role: UserRole | None = None,
        approved: bool | None = None,
    ) -> list[User]:
        return [user for user in self._users.values() if matches_filter(user, role, approved)]

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user


class InMemoryStockRepository:
    """Stock storage keyed by (seller, item name)."""

    def __init__(self) -> None:
        self._items: dict[tuple[UUID, str], StockItem] = {}

    async def fetch_stock_item(self, seller_id: UUID, item_name: str) -> StockItem | None:
        return self._items.get((seller_id, item_name))

    async def fetch_stock_item_by_id(self, item_id: UUID) -> StockItem | None:
        return next((item for item in self._items.values() if item.id == item_id), None)

    async def list_stock(self, seller_id: UUID | None = None) -> list[StockItem]:
        return [
            item
            for item in self._items.values()
            if seller_id is None or item.seller_id == seller_id
        ]

    async def save(self, item: StockItem) -> StockItem:
        self._items[(item.seller_id, item.item_name)] = item
        return item
