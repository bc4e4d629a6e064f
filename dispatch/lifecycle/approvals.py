"""Admin approvals and seller stock maintenance.

Users and stock lines start unapproved. Only an approved admin can lift the
gate, and a seller editing an approved line sends it back for review. Like the
engine, these functions return new snapshots and never mutate their inputs.
"""

from datetime import datetime

from dispatch.lifecycle.errors import MissingParameter, Unauthorized
from dispatch.models.order import utcnow
from dispatch.models.stock import StockDraft, StockItem, StockUpdate
from dispatch.models.user import User, UserRole


def is_approved_admin(actor: User) -> bool:
    """Check whether ``actor`` may approve users and stock."""
    return actor.role == UserRole.ADMIN and actor.approved


def approve_user(user: User, actor: User) -> User:
    """Mark ``user`` as approved on behalf of an admin."""
    if not is_approved_admin(actor):
        raise Unauthorized("Only approved admins can approve users")
    return user.model_copy(update={"approved": True})


def approve_stock_item(
    item: StockItem,
    actor: User,
    now: datetime | None = None,
) -> StockItem:
    """Mark a stock line as usable for new orders."""
    if not is_approved_admin(actor):
        raise Unauthorized("Only approved admins can approve stock")
    return item.model_copy(update={"approved": True, "last_updated": now or utcnow()})


def new_stock_item(
    draft: StockDraft,
    actor: User,
    now: datetime | None = None,
) -> StockItem:
    """
    Build a stock line from a draft.

    Sellers add lines for themselves and wait for approval. Admins add lines
    for the seller named in ``draft.seller_id``; those start approved.
    """
    if not actor.approved:
        raise Unauthorized("Unapproved users cannot add stock")

    if actor.role == UserRole.SELLER:
        if draft.seller_id is not None and draft.seller_id != actor.id:
            raise Unauthorized("Sellers can only add their own stock")
        seller_id = actor.id
        approved = False
    elif actor.role == UserRole.ADMIN:
        if draft.seller_id is None:
            raise MissingParameter("seller_id")
        seller_id = draft.seller_id
        approved = True
    else:
        raise Unauthorized(f"{actor.role.value} cannot add stock")

    return StockItem(
        item_name=draft.item_name,
        quantity=draft.quantity,
        seller_id=seller_id,
        approved=approved,
        last_updated=now or utcnow(),
    )


def update_stock_item(
    item: StockItem,
    update: StockUpdate,
    actor: User,
    now: datetime | None = None,
) -> StockItem:
    """
    Change the quantity of a stock line.

    A seller changing the quantity of their own line resets its approval.
    Admin edits keep the current approval.
    """
    if not actor.approved:
        raise Unauthorized("Unapproved users cannot edit stock")

    if actor.role == UserRole.SELLER:
        if item.seller_id != actor.id:
            raise Unauthorized("Sellers can only edit their own stock")
        approved = item.approved and update.quantity == item.quantity
    elif actor.role == UserRole.ADMIN:
        approved = item.approved
    else:
        raise Unauthorized(f"{actor.role.value} cannot edit stock")

    return item.model_copy(
        update={
            "quantity": update.quantity,
            "approved": approved,
            "last_updated": now or utcnow(),
        }
    )


def can_view_stock(actor: User, item: StockItem) -> bool:
    """Check whether ``item`` belongs on ``actor``'s stock list."""
    if actor.role == UserRole.ADMIN:
        return True
    if actor.role == UserRole.SELLER:
        return item.seller_id == actor.id
    return False
