"""Order service: fetch, decide with the lifecycle engine, persist."""

from typing import Any
from uuid import UUID

from dispatch.lifecycle import engine
from dispatch.lifecycle.approvals import is_approved_admin
from dispatch.lifecycle.assignment import eligible_drivers
from dispatch.lifecycle.errors import (
    ActorNotFound,
    LifecycleError,
    OrderNotFound,
    StaleOrder,
    Unauthorized,
)
from dispatch.lifecycle.policy import allowed_next_statuses_for, can_modify, can_view
from dispatch.models.order import Order, OrderDraft, OrderStatus
from dispatch.models.user import User, UserRole
from dispatch.state.repositories import OrderRepository, StockRepository, UserRepository
from dispatch.utils.logging import LifecycleLogger


class OrderService:
    """
    Runs every order action against the repositories.

    The engine decides; this class only loads its inputs and stores its
    output. Writes use the status the engine saw as a compare-and-swap
    precondition, so a concurrent change surfaces as StaleOrder instead of
    being overwritten.
    """

    def __init__(
        self,
        orders: OrderRepository,
        users: UserRepository,
        stock: StockRepository,
    ):
        self.orders = orders
        self.users = users
        self.stock = stock
        self.logger = LifecycleLogger("order_service")

    async def _get_actor(self, actor_id: UUID) -> User:
        actor = await self.users.fetch_user(actor_id)
        if actor is None:
            raise ActorNotFound(f"User {actor_id} not found")
        return actor

    async def _get_order(self, order_id: UUID) -> Order:
        order = await self.orders.fetch_order(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    async def create_order(self, draft: OrderDraft, actor_id: UUID) -> Order:
        """Create a pending order after checking the seller's stock."""
        actor = await self._get_actor(actor_id)
        seller_id = draft.seller_id if actor.role == UserRole.ADMIN else actor.id

        stock_item = None
        if seller_id is not None:
            stock_item = await self.stock.fetch_stock_item(seller_id, draft.item)

        try:
            order = engine.create_order(draft, actor, stock_item)
        except LifecycleError as e:
            self.logger.log_rejection(e.code, None, str(actor_id), item=draft.item)
            raise

        await self.orders.add(order)
        self.logger.log_created(
            str(order.id),
            str(actor.id),
            str(order.seller_id),
            item=order.item,
            quantity=order.quantity,
        )
        return order

    async def transition(
        self,
        order_id: UUID,
        to_status: OrderStatus,
        actor_id: UUID,
        driver_id: UUID | None = None,
        expected_status: OrderStatus | None = None,
    ) -> Order:
        """
        Apply a status change requested by an actor.

        Args:
            order_id: Order to change
            to_status: Requested status
            actor_id: Acting user
            driver_id: Driver to bind when ``to_status`` is assigned
            expected_status: Status the caller last saw; a mismatch is StaleOrder

        Returns:
            The persisted order
        """
        to_status = OrderStatus(to_status)
        order = await self._get_order(order_id)
        actor = await self._get_actor(actor_id)

        try:
            if expected_status is not None and order.status != OrderStatus(expected_status):
                raise StaleOrder(
                    f"Order is {order.status.value}, caller expected {OrderStatus(expected_status).value}"
                )

            users: dict[UUID, User] = {}
            if to_status == OrderStatus.ASSIGNED and driver_id is not None:
                driver = await self.users.fetch_user(driver_id)
                if driver is not None:
                    users[driver.id] = driver

            updated = engine.request_transition(
                order,
                to_status,
                actor,
                driver_id=driver_id,
                users=users,
            )
            await self.orders.persist(updated, expected_status=order.status)
        except LifecycleError as e:
            self.logger.log_rejection(
                e.code,
                str(order_id),
                str(actor_id),
                from_status=order.status.value,
                to_status=to_status.value,
            )
            raise

        if updated.status == OrderStatus.ASSIGNED:
            self.logger.log_assignment(str(updated.id), str(actor.id), str(updated.driver_id))
        else:
            self.logger.log_transition(
                str(updated.id),
                str(actor.id),
                order.status.value,
                updated.status.value,
            )
        return updated

    async def assign(self, order_id: UUID, driver_id: UUID, actor_id: UUID) -> Order:
        """Bind a driver to a pending order."""
        return await self.transition(order_id, OrderStatus.ASSIGNED, actor_id, driver_id=driver_id)

    async def delete_order(self, order_id: UUID, actor_id: UUID) -> None:
        """Delete an order the actor is still allowed to modify."""
        order = await self._get_order(order_id)
        actor = await self._get_actor(actor_id)

        if not can_modify(actor, order):
            self.logger.log_rejection(Unauthorized.code, str(order_id), str(actor_id), action="delete")
            raise Unauthorized("This order can no longer be deleted by this user")

        try:
            await self.orders.delete(order_id, expected_status=order.status)
        except StaleOrder:
            self.logger.log_rejection(StaleOrder.code, str(order_id), str(actor_id), action="delete")
            raise
        self.logger.log_deleted(str(order_id), str(actor_id))

    async def get_order(self, order_id: UUID, actor_id: UUID) -> dict[str, Any]:
        """Order details plus the statuses the actor may move it to."""
        order = await self._get_order(order_id)
        actor = await self._get_actor(actor_id)

        if not can_view(actor, order):
            raise Unauthorized("This order is not visible to this user")

        return {
            "order": order,
            "allowed_statuses": allowed_next_statuses_for(actor, order),
            "can_modify": can_modify(actor, order),
        }

    async def list_orders(
        self,
        actor_id: UUID,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        """Orders visible to the actor, optionally narrowed to one status."""
        actor = await self._get_actor(actor_id)
        orders = engine.visible_orders(actor, await self.orders.list_orders())
        orders = engine.filter_by_status(orders, status)
        return sorted(orders, key=lambda order: order.created_at, reverse=True)

    async def summary(self, actor_id: UUID) -> dict[str, Any]:
        """Dashboard stat cards over the orders visible to the actor."""
        actor = await self._get_actor(actor_id)
        orders = engine.visible_orders(actor, await self.orders.list_orders())
        return engine.dashboard_summary(orders)

    async def eligible_drivers(self, actor_id: UUID) -> list[User]:
        """Drivers an admin may choose from when assigning."""
        actor = await self._get_actor(actor_id)
        if not is_approved_admin(actor):
            raise Unauthorized("Only approved admins can list drivers for assignment")

        candidates = await self.users.list_users(role=UserRole.DRIVER, approved=True)
        return eligible_drivers(candidates)
