"""Order lifecycle engine.

Synchronous decision functions over order snapshots. Callers fetch the order,
ask the engine for the next snapshot and persist the result themselves; the
engine never performs I/O and never mutates its inputs.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any
from uuid import UUID

from dispatch.lifecycle.assignment import assign
from dispatch.lifecycle.errors import IllegalTransition, MissingParameter, Unauthorized
from dispatch.lifecycle.policy import can_request, can_view
from dispatch.lifecycle.stock_guard import check_stock
from dispatch.lifecycle.transitions import is_legal_transition
from dispatch.models.order import Order, OrderDraft, OrderStatus, utcnow
from dispatch.models.stock import StockItem
from dispatch.models.user import User, UserRole


def request_transition(
    order: Order,
    to_status: OrderStatus,
    actor: User,
    driver_id: UUID | None = None,
    users: Mapping[UUID, User] | None = None,
    now: datetime | None = None,
) -> Order:
    """
    Move an order to a new status on behalf of an actor.

    Checks run in a fixed order and stop at the first failure: assignment
    requests go to the assignment workflow; everything else is checked
    against the transition table, then the authorization policy.

    Args:
        order: Order snapshot; never mutated
        to_status: Requested status
        actor: User requesting the change
        driver_id: Driver to bind, required when ``to_status`` is assigned
        users: Known users for resolving ``driver_id``
        now: Timestamp for ``updated_at``, defaults to the current time

    Returns:
        The updated order
    """
    to_status = OrderStatus(to_status)

    if to_status == OrderStatus.ASSIGNED:
        if driver_id is None:
            raise MissingParameter("driver_id")
        return assign(order, driver_id, actor, users or {}, now=now)

    if not is_legal_transition(order.status, to_status):
        raise IllegalTransition(order.status, to_status)

    if not can_request(actor, order, to_status):
        raise Unauthorized(f"{actor.role.value} cannot move this order to {to_status.value}")

    return order.model_copy(update={"status": to_status, "updated_at": now or utcnow()})


def create_order(
    draft: OrderDraft,
    actor: User,
    stock_item: StockItem | None,
    now: datetime | None = None,
) -> Order:
    """
    Build a new pending order from a draft.

    Sellers create orders for themselves; admins create them on behalf of the
    seller named in ``draft.seller_id``. The seller's stock must cover the
    requested quantity at this moment.
    """
    if not actor.approved:
        raise Unauthorized("Unapproved users cannot create orders")

    if actor.role == UserRole.SELLER:
        if draft.seller_id is not None and draft.seller_id != actor.id:
            raise Unauthorized("Sellers can only create their own orders")
        seller_id = actor.id
    elif actor.role == UserRole.ADMIN:
        if draft.seller_id is None:
            raise MissingParameter("seller_id")
        seller_id = draft.seller_id
    else:
        raise Unauthorized(f"{actor.role.value} cannot create orders")

    check_stock(seller_id, draft.item, draft.quantity, stock_item)

    timestamp = now or utcnow()
    return Order(
        customer_name=draft.customer_name,
        customer_phone=draft.customer_phone,
        delivery_street=draft.delivery_street,
        delivery_city=draft.delivery_city,
        delivery_location=draft.delivery_location,
        item=draft.item,
        quantity=draft.quantity,
        comment=draft.comment,
        seller_id=seller_id,
        status=OrderStatus.PENDING,
        created_at=timestamp,
        updated_at=timestamp,
    )


# Read side


def count_by_status(orders: Iterable[Order]) -> dict[OrderStatus, int]:
    """Count orders per status; every status is present, zero if unused."""
    counts = {status: 0 for status in OrderStatus}
    for order in orders:
        counts[order.status] += 1
    return counts


def filter_by_status(
    orders: Iterable[Order],
    status: OrderStatus | None = None,
) -> list[Order]:
    """Orders in ``status``, or all orders when ``status`` is None."""
    if status is None:
        return list(orders)
    status = OrderStatus(status)
    return [order for order in orders if order.status == status]


def visible_orders(actor: User, orders: Iterable[Order]) -> list[Order]:
    """Orders ``actor`` is allowed to see on their dashboard."""
    return [order for order in orders if can_view(actor, order)]


def dashboard_summary(orders: Iterable[Order]) -> dict[str, Any]:
    """Totals for dashboard stat cards and filter badges."""
    orders = list(orders)
    return {
        "total": len(orders),
        "by_status": {status.value: count for status, count in count_by_status(orders).items()},
    }
