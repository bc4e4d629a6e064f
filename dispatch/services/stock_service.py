"""Stock service: seller inventory lines and their admin approval."""

from uuid import UUID

from dispatch.lifecycle import approvals
from dispatch.lifecycle.errors import (
    ActorNotFound,
    ItemNotFound,
    LifecycleError,
    StockItemExists,
    Unauthorized,
)
from dispatch.models.stock import StockDraft, StockItem, StockUpdate
from dispatch.models.user import User, UserRole
from dispatch.state.repositories import StockRepository, UserRepository
from dispatch.utils.logging import LifecycleLogger


class StockService:
    """
    Maintains the stock lines orders are checked against.

    Lines added or re-counted by a seller wait for an admin before they can
    back new orders.
    """

    def __init__(self, users: UserRepository, stock: StockRepository):
        self.users = users
        self.stock = stock
        self.logger = LifecycleLogger("stock_service")

    async def _get_actor(self, actor_id: UUID) -> User:
        actor = await self.users.fetch_user(actor_id)
        if actor is None:
            raise ActorNotFound(f"User {actor_id} not found")
        return actor

    async def _get_item(self, item_id: UUID) -> StockItem:
        item = await self.stock.fetch_stock_item_by_id(item_id)
        if item is None:
            raise ItemNotFound(f"Stock item {item_id} not found")
        return item

    async def create_stock_item(self, draft: StockDraft, actor_id: UUID) -> StockItem:
        """Add a stock line for a seller."""
        actor = await self._get_actor(actor_id)

        try:
            item = approvals.new_stock_item(draft, actor)
            if await self.stock.fetch_stock_item(item.seller_id, item.item_name) is not None:
                raise StockItemExists(f"Stock for item '{item.item_name}' already exists")
        except LifecycleError as e:
            self.logger.log_rejection(e.code, None, str(actor_id), item=draft.item_name)
            raise

        await self.stock.save(item)
        self.logger.log_stock_saved(
            str(item.id),
            str(actor_id),
            str(item.seller_id),
            quantity=item.quantity,
            approved=item.approved,
        )
        return item

    async def update_stock_item(
        self,
        item_id: UUID,
        update: StockUpdate,
        actor_id: UUID,
    ) -> StockItem:
        """Change a line's quantity; seller edits send it back for approval."""
        actor = await self._get_actor(actor_id)
        item = await self._get_item(item_id)

        try:
            updated = approvals.update_stock_item(item, update, actor)
        except LifecycleError as e:
            self.logger.log_rejection(e.code, None, str(actor_id), item_id=str(item_id))
            raise

        await self.stock.save(updated)
        self.logger.log_stock_saved(
            str(updated.id),
            str(actor_id),
            str(updated.seller_id),
            quantity=updated.quantity,
            approved=updated.approved,
        )
        return updated

    async def approve_stock_item(self, item_id: UUID, actor_id: UUID) -> StockItem:
        """Approve a stock line so it can back new orders."""
        actor = await self._get_actor(actor_id)
        item = await self._get_item(item_id)

        try:
            approved = approvals.approve_stock_item(item, actor)
        except LifecycleError as e:
            self.logger.log_rejection(e.code, None, str(actor_id), item_id=str(item_id))
            raise

        await self.stock.save(approved)
        self.logger.log_approved("stock", str(item_id), str(actor_id))
        return approved

    async def list_stock(
        self,
        actor_id: UUID,
        seller_id: UUID | None = None,
        available: bool | None = None,
    ) -> list[StockItem]:
        """
        Stock lines visible to the actor.

        Args:
            actor_id: Acting user; sellers only ever see their own lines
            seller_id: Narrow an admin's list to one seller
            available: Keep only lines that can (or cannot) back new orders
        """
        actor = await self._get_actor(actor_id)
        if actor.role == UserRole.DRIVER:
            raise Unauthorized("Drivers have no stock")
        if actor.role == UserRole.SELLER:
            seller_id = actor.id

        items = [
            item
            for item in await self.stock.list_stock(seller_id)
            if approvals.can_view_stock(actor, item)
        ]
        if available is not None:
            items = [item for item in items if item.is_available == available]
        return sorted(items, key=lambda item: item.item_name)
