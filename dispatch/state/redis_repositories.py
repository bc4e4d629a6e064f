"""Redis-backed repositories built on the shared StateManager."""

from functools import partial
from typing import Any
from uuid import UUID

from dispatch.lifecycle.errors import StaleOrder
from dispatch.models.order import Order, OrderStatus
from dispatch.models.stock import StockItem
from dispatch.models.user import User, UserRole
from dispatch.state.manager import StateManager
from dispatch.state.repositories import matches_filter


def has_status(current: dict[str, Any] | None, expected_status: OrderStatus) -> bool:
    """Check a stored order document against the status a caller last saw."""
    return current is not None and current.get("status") == expected_status.value


class RedisOrderRepository:
    """Orders stored as JSON under ``<prefix>:order:<id>`` with an id index."""

    def __init__(self, state_manager: StateManager):
        self.state = state_manager
        self.index_key = state_manager.key("orders")

    def _order_key(self, order_id: UUID) -> str:
        return self.state.key("order", str(order_id))

    async def fetch_order(self, order_id: UUID) -> Order | None:
        data = await self.state.get(self._order_key(order_id))
        return Order(**data) if data else None

    async def list_orders(self) -> list[Order]:
        ids = sorted(await self.state.smembers(self.index_key))
        rows = await self.state.mget([self.state.key("order", order_id) for order_id in ids])
        return [Order(**row) for row in rows if row]

    async def add(self, order: Order) -> Order:
        await self.state.set(self._order_key(order.id), order.model_dump(mode="json"))
        await self.state.sadd(self.index_key, str(order.id))
        return order

    async def persist(self, order: Order, expected_status: OrderStatus) -> Order:
        written = await self.state.compare_and_set(
            self._order_key(order.id),
            order.model_dump(mode="json"),
            partial(has_status, expected_status=expected_status),
        )
        if not written:
            raise StaleOrder(f"Order {order.id} changed since it was read")
        return order

    async def delete(self, order_id: UUID, expected_status: OrderStatus) -> None:
        deleted = await self.state.compare_and_delete(
            self._order_key(order_id),
            partial(has_status, expected_status=expected_status),
            index_key=self.index_key,
            member=str(order_id),
        )
        if not deleted:
            raise StaleOrder(f"Order {order_id} changed since it was read")


class RedisUserRepository:
    """Users stored as JSON under ``<prefix>:user:<id>``."""

    def __init__(self, state_manager: StateManager):
        self.state = state_manager
        self.index_key = state_manager.key("users")

    async def fetch_user(self, user_id: UUID) -> User | None:
        data = await self.state.get(self.state.key("user", str(user_id)))
        return User(**data) if data else None

    async def list_users(
        self,
        role: UserRole | None = None,
        approved: bool | None = None,
    ) -> list[User]:
        ids = sorted(await self.state.smembers(self.index_key))
        rows = await self.state.mget([self.state.key("user", user_id) for user_id in ids])
        users = [User(**row) for row in rows if row]
        return [user for user in users if matches_filter(user, role, approved)]

    async def save(self, user: User) -> User:
        await self.state.set(self.state.key("user", str(user.id)), user.model_dump(mode="json"))
        await self.state.sadd(self.index_key, str(user.id))
        return user


class RedisStockRepository:
    """Stock lines stored under ``<prefix>:stock:<seller>:<item>``.

    ``<prefix>:stock_ref:<id>`` points from an item id back to its key.
    """

    def __init__(self, state_manager: StateManager):
        self.state = state_manager

    def _seller_index(self, seller_id: UUID) -> str:
        return self.state.key("stock", str(seller_id))

    def _item_key(self, seller_id: UUID, item_name: str) -> str:
        return self.state.key("stock", str(seller_id), item_name)

    def _ref_key(self, item_id: UUID) -> str:
        return self.state.key("stock_ref", str(item_id))

    async def fetch_stock_item(self, seller_id: UUID, item_name: str) -> StockItem | None:
        data = await self.state.get(self._item_key(seller_id, item_name))
        return StockItem(**data) if data else None

    async def fetch_stock_item_by_id(self, item_id: UUID) -> StockItem | None:
        ref = await self.state.get(self._ref_key(item_id))
        if not ref:
            return None
        return await self.fetch_stock_item(UUID(ref["seller_id"]), ref["item_name"])

    async def list_stock(self, seller_id: UUID | None = None) -> list[StockItem]:
        if seller_id is not None:
            seller_ids = [str(seller_id)]
        else:
            seller_ids = sorted(await self.state.smembers(self.state.key("stock_sellers")))

        keys = []
        for seller in seller_ids:
            for item_name in sorted(await self.state.smembers(self.state.key("stock", seller))):
                keys.append(self.state.key("stock", seller, item_name))

        rows = await self.state.mget(keys)
        return [StockItem(**row) for row in rows if row]

    async def save(self, item: StockItem) -> StockItem:
        await self.state.set(
            self._item_key(item.seller_id, item.item_name),
            item.model_dump(mode="json"),
        )
        await self.state.sadd(self._seller_index(item.seller_id), item.item_name)
        await self.state.sadd(self.state.key("stock_sellers"), str(item.seller_id))
        await self.state.set(
            self._ref_key(item.id),
            {"seller_id": str(item.seller_id), "item_name": item.item_name},
        )
        return item
