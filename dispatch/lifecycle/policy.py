"""Role authorization policy for order actions.

Pure predicates: they never raise and never mutate. Enforcing the answer is
the engine's job.
"""

from dispatch.lifecycle.transitions import allowed_next_statuses, is_legal_transition
from dispatch.models.order import Order, OrderStatus
from dispatch.models.user import User, UserRole

# Statuses a bound driver may move an order into
DRIVER_TARGETS = frozenset(
    {
        OrderStatus.IN_TRANSIT,
        OrderStatus.DELIVERED,
        OrderStatus.NO_ANSWER,
        OrderStatus.POSTPONED,
        OrderStatus.CANCELED,
    }
)


def can_request(actor: User, order: Order, to_status: OrderStatus) -> bool:
    """Check whether ``actor`` may ask for ``order`` to move to ``to_status``.

    - sellers may only cancel their own pending orders;
    - drivers may only act on orders bound to them, never assign;
    - admins may request anything the transition table allows.

    Unapproved actors may request nothing.
    """
    to_status = OrderStatus(to_status)

    if not actor.approved:
        return False

    if actor.role == UserRole.SELLER:
        return (
            order.seller_id == actor.id
            and order.status == OrderStatus.PENDING
            and to_status == OrderStatus.CANCELED
        )

    if actor.role == UserRole.DRIVER:
        return (
            order.driver_id is not None
            and order.driver_id == actor.id
            and to_status in DRIVER_TARGETS
            and is_legal_transition(order.status, to_status)
        )

    if actor.role == UserRole.ADMIN:
        return is_legal_transition(order.status, to_status)

    return False


def can_modify(actor: User, order: Order) -> bool:
    """Check whether ``actor`` may edit or delete ``order``."""
    if not actor.approved:
        return False

    if actor.role == UserRole.SELLER:
        return order.seller_id == actor.id and order.status == OrderStatus.PENDING

    if actor.role == UserRole.ADMIN:
        return not order.is_terminal

    return False


def can_view(actor: User, order: Order) -> bool:
    """Check whether ``order`` belongs on ``actor``'s order list."""
    if actor.role == UserRole.ADMIN:
        return True
    if actor.role == UserRole.SELLER:
        return order.seller_id == actor.id
    if actor.role == UserRole.DRIVER:
        return order.driver_id == actor.id
    return False


def allowed_next_statuses_for(actor: User, order: Order) -> list[OrderStatus]:
    """Statuses to offer in ``actor``'s "update status" menu for ``order``."""
    return [
        status
        for status in allowed_next_statuses(order.status)
        if can_request(actor, order, status)
    ]
