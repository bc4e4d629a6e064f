"""Order lifecycle core: transition table, policy, guards and engine."""

from dispatch.lifecycle.approvals import (
    approve_stock_item,
    approve_user,
    new_stock_item,
    update_stock_item,
)
from dispatch.lifecycle.assignment import assign, eligible_drivers
from dispatch.lifecycle.engine import (
    count_by_status,
    create_order,
    dashboard_summary,
    filter_by_status,
    request_transition,
    visible_orders,
)
from dispatch.lifecycle.errors import (
    ActorNotFound,
    DriverNotApproved,
    DriverNotFound,
    IllegalTransition,
    ItemNotApproved,
    ItemNotFound,
    LifecycleError,
    MissingParameter,
    NotPending,
    OrderNotFound,
    OutOfStock,
    StaleOrder,
    StockItemExists,
    Unauthorized,
    UserNotFound,
)
from dispatch.lifecycle.policy import allowed_next_statuses_for, can_modify, can_request
from dispatch.lifecycle.stock_guard import check_stock
from dispatch.lifecycle.transitions import (
    OrderTransitions,
    allowed_next_statuses,
    is_legal_transition,
)

__all__ = [
    # Dashboard API
    "request_transition",
    "assign",
    "count_by_status",
    "is_legal_transition",
    "can_request",
    # Supporting functions
    "OrderTransitions",
    "allowed_next_statuses",
    "allowed_next_statuses_for",
    "can_modify",
    "check_stock",
    "create_order",
    "dashboard_summary",
    "eligible_drivers",
    "filter_by_status",
    "visible_orders",
    # Approvals and stock
    "approve_user",
    "approve_stock_item",
    "new_stock_item",
    "update_stock_item",
    # Errors
    "LifecycleError",
    "IllegalTransition",
    "Unauthorized",
    "NotPending",
    "MissingParameter",
    "DriverNotFound",
    "DriverNotApproved",
    "ItemNotFound",
    "ItemNotApproved",
    "OutOfStock",
    "StaleOrder",
    "OrderNotFound",
    "ActorNotFound",
    "UserNotFound",
    "StockItemExists",
]
