"""Order status transition table."""

from dispatch.models.order import OrderStatus


class OrderTransitions:
    """Valid order status transitions.

    This table is the only place the allowed moves are encoded. Status menus,
    the authorization policy and the engine all read from it.
    """

    TRANSITIONS: dict[OrderStatus, tuple[OrderStatus, ...]] = {
        OrderStatus.PENDING: (
            OrderStatus.ASSIGNED,
            OrderStatus.CANCELED,
        ),
        OrderStatus.ASSIGNED: (
            OrderStatus.IN_TRANSIT,
            OrderStatus.POSTPONED,
            OrderStatus.CANCELED,
        ),
        OrderStatus.IN_TRANSIT: (
            OrderStatus.DELIVERED,
            OrderStatus.NO_ANSWER,
            OrderStatus.POSTPONED,
            OrderStatus.CANCELED,
        ),
        OrderStatus.NO_ANSWER: (
            OrderStatus.IN_TRANSIT,
            OrderStatus.POSTPONED,
            OrderStatus.CANCELED,
        ),
        OrderStatus.POSTPONED: (
            OrderStatus.IN_TRANSIT,
            OrderStatus.DELIVERED,
            OrderStatus.CANCELED,
            OrderStatus.NO_ANSWER,
        ),
        OrderStatus.DELIVERED: (),
        OrderStatus.CANCELED: (),
    }

    @classmethod
    def can_transition(cls, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        """Check if a status transition is valid."""
        return to_status in cls.TRANSITIONS.get(from_status, ())

    @classmethod
    def next_statuses(cls, from_status: OrderStatus) -> list[OrderStatus]:
        """Statuses reachable in one step, in menu order."""
        return list(cls.TRANSITIONS.get(from_status, ()))


def is_legal_transition(from_status: OrderStatus, to_status: OrderStatus) -> bool:
    """Return True if ``to_status`` is directly reachable from ``from_status``.

    Total over the status enum; self-transitions are always illegal.
    """
    return OrderTransitions.can_transition(OrderStatus(from_status), OrderStatus(to_status))


def allowed_next_statuses(status: OrderStatus) -> list[OrderStatus]:
    """Table row for ``status``; empty for terminal statuses."""
    return OrderTransitions.next_statuses(OrderStatus(status))
