"""Driver assignment workflow: the pending -> assigned transition."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from uuid import UUID

from dispatch.lifecycle.errors import DriverNotApproved, DriverNotFound, NotPending, Unauthorized
from dispatch.models.order import Order, OrderStatus, utcnow
from dispatch.models.user import User, UserRole


def eligible_drivers(users: Iterable[User]) -> list[User]:
    """Users an admin may pick for an assignment."""
    return [user for user in users if user.is_eligible_driver]


def assign(
    order: Order,
    driver_id: UUID,
    actor: User,
    users: Mapping[UUID, User],
    now: datetime | None = None,
) -> Order:
    """
    Bind a driver to a pending order.

    Args:
        order: Order snapshot; never mutated
        driver_id: Candidate driver
        actor: User requesting the assignment
        users: Known users, used to resolve ``driver_id``
        now: Timestamp for ``updated_at``, defaults to the current time

    Returns:
        A new order in ``assigned`` status bound to the driver
    """
    if actor.role != UserRole.ADMIN or not actor.approved:
        raise Unauthorized("Only an approved admin can assign drivers")

    if order.status != OrderStatus.PENDING:
        raise NotPending(f"Order is {order.status.value}, not pending")

    driver = users.get(driver_id)
    if driver is None:
        raise DriverNotFound(f"Driver {driver_id} not found")

    if not driver.is_eligible_driver:
        raise DriverNotApproved(f"User {driver_id} is not an approved driver")

    return order.model_copy(
        update={
            "driver_id": driver.id,
            "status": OrderStatus.ASSIGNED,
            "updated_at": now or utcnow(),
        }
    )
