"""Order lifecycle rejections.

Raised by the pure lifecycle functions and propagated unchanged by the order
service. The API layer translates them into HTTP responses using ``code``.
"""

from uuid import UUID

from dispatch.models.order import OrderStatus


class LifecycleError(Exception):
    """Base class for every rejected lifecycle request."""

    code = "lifecycle_error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.__doc__)
        self.message = message or self.__doc__


class IllegalTransition(LifecycleError):
    """The requested status is not reachable from the current status."""

    code = "illegal_transition"

    def __init__(self, from_status: OrderStatus, to_status: OrderStatus):
        super().__init__(f"Cannot move order from {from_status.value} to {to_status.value}")
        self.from_status = from_status
        self.to_status = to_status


class Unauthorized(LifecycleError):
    """The actor is not permitted to perform this action on the order."""

    code = "unauthorized"


class NotPending(LifecycleError):
    """A driver can only be assigned to a pending order."""

    code = "not_pending"


class MissingParameter(LifecycleError):
    """A required parameter was not supplied."""

    code = "missing_parameter"

    def __init__(self, parameter: str):
        super().__init__(f"Missing required parameter: {parameter}")
        self.parameter = parameter


class DriverNotFound(LifecycleError):
    """The selected driver does not exist."""

    code = "driver_not_found"


class DriverNotApproved(LifecycleError):
    """The selected user is not an approved driver."""

    code = "driver_not_approved"


class ItemNotFound(LifecycleError):
    """The seller has no stock line for the requested item."""

    code = "item_not_found"


class ItemNotApproved(LifecycleError):
    """The seller's stock line has not been approved by an admin."""

    code = "item_not_approved"


class OutOfStock(LifecycleError):
    """Requested quantity exceeds the available stock."""

    code = "out_of_stock"

    def __init__(self, available: int):
        super().__init__(f"Only {available} unit(s) available")
        self.available = available


class StaleOrder(LifecycleError):
    """The stored order changed since it was read; refetch and retry."""

    code = "stale_order"


class OrderNotFound(LifecycleError):
    """The requested order does not exist."""

    code = "order_not_found"

    def __init__(self, order_id: UUID):
        super().__init__(f"Order {order_id} not found")
        self.order_id = order_id


class ActorNotFound(LifecycleError):
    """The acting user does not exist."""

    code = "actor_not_found"


class UserNotFound(LifecycleError):
    """The target user does not exist."""

    code = "user_not_found"

    def __init__(self, user_id: UUID):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class StockItemExists(LifecycleError):
    """The seller already has a stock line with this name."""

    code = "stock_item_exists"
