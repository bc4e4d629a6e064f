"""API routes for the dispatch dashboard."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from dispatch.api.dependencies import (
    get_actor_id,
    get_order_service,
    get_stock_service,
    get_user_service,
)
from dispatch.lifecycle.transitions import allowed_next_statuses
from dispatch.models.order import Order, OrderDraft, OrderStatus
from dispatch.models.stock import StockDraft, StockItem, StockUpdate
from dispatch.models.user import User, UserRole
from dispatch.services.order_service import OrderService
from dispatch.services.stock_service import StockService
from dispatch.services.user_service import UserService
from dispatch.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


# Request/Response Models


class TransitionRequest(BaseModel):
    """Request to move an order to a new status."""

    status: OrderStatus
    driver_id: UUID | None = None
    expected_status: OrderStatus | None = None


class AssignRequest(BaseModel):
    """Request to bind a driver to a pending order."""

    driver_id: UUID


class OrderDetailResponse(BaseModel):
    """Order with the actions available to the caller."""

    order: Order
    allowed_statuses: list[OrderStatus]
    can_modify: bool


class DriverResponse(BaseModel):
    """Driver selectable for an assignment."""

    id: UUID
    username: str


class StatusInfo(BaseModel):
    """Status metadata for menus and chips."""

    status: OrderStatus
    label: str
    is_terminal: bool
    next_statuses: list[OrderStatus]


class StockResponse(BaseModel):
    """Stock line with its availability for new orders."""

    id: UUID
    item_name: str
    quantity: int
    seller_id: UUID
    approved: bool
    is_available: bool

    @classmethod
    def from_item(cls, item: StockItem) -> "StockResponse":
        return cls(
            id=item.id,
            item_name=item.item_name,
            quantity=item.quantity,
            seller_id=item.seller_id,
            approved=item.approved,
            is_available=item.is_available,
        )


# Order endpoints


@router.post(
    "/orders",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
)
async def create_order(
    draft: OrderDraft,
    actor_id: UUID = Depends(get_actor_id),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """
    Create a new order.

    Sellers create orders for themselves; admins must name the seller.
    """
    return await service.create_order(draft, actor_id)


@router.get("/orders", response_model=list[Order])
async def list_orders(
    status: OrderStatus | None = None,
    actor_id: UUID = Depends(get_actor_id),
    service: OrderService = Depends(get_order_service),
) -> list[Order]:
    """List the caller's orders, optionally filtered by status."""
    return await service.list_orders(actor_id, status)


@router.get("/orders/stats")
async def order_stats(
    actor_id: UUID = Depends(get_actor_id),
    service: OrderService = Depends(get_order_service),
) -> dict[str, Any]:
    """Per-status counts for dashboard cards and filter badges."""
    return await service.summary(actor_id)


@router.get("/orders/{order_id}", response_model=OrderDetailResponse)
async def get_order(
    order_id: UUID,
    actor_id: UUID = Depends(get_actor_id),
    service: OrderService = Depends(get_order_service),
) -> OrderDetailResponse:
    """Get order details and the statuses the caller may choose next."""
    return OrderDetailResponse(**await service.get_order(order_id, actor_id))


@router.patch("/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: UUID,
    request: TransitionRequest,
    actor_id: UUID = Depends(get_actor_id),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Request a status transition."""
    order = await service.transition(
        order_id,
        request.status,
        actor_id,
        driver_id=request.driver_id,
        expected_status=request.expected_status,
    )

    logger.info(
        "order_status_updated_via_api",
        order_id=str(order_id),
        status=order.status.value,
    )

    return order


@router.patch("/orders/{order_id}/assign", response_model=Order)
async def assign_driver(
    order_id: UUID,
    request: AssignRequest,
    actor_id: UUID = Depends(get_actor_id),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Assign a driver to a pending order."""
    return await service.assign(order_id, request.driver_id, actor_id)


@router.delete(
    "/orders/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_order(
    order_id: UUID,
    actor_id: UUID = Depends(get_actor_id),
    service: OrderService = Depends(get_order_service),
) -> None:
    """Delete an order that has not left pending."""
    await service.delete_order(order_id, actor_id)


# Driver endpoints


@router.get("/drivers/eligible", response_model=list[DriverResponse])
async def list_eligible_drivers(
    actor_id: UUID = Depends(get_actor_id),
    service: OrderService = Depends(get_order_service),
) -> list[DriverResponse]:
    """Approved drivers an admin can assign."""
    drivers = await service.eligible_drivers(actor_id)
    return [DriverResponse(id=driver.id, username=driver.username) for driver in drivers]


# User endpoints


@router.get("/users", response_model=list[User])
async def list_users(
    role: UserRole | None = None,
    approved: bool | None = None,
    actor_id: UUID = Depends(get_actor_id),
    service: UserService = Depends(get_user_service),
) -> list[User]:
    """List users for the admin screens."""
    return await service.list_users(actor_id, role=role, approved=approved)


@router.patch("/users/{user_id}/approve", response_model=User)
async def approve_user(
    user_id: UUID,
    actor_id: UUID = Depends(get_actor_id),
    service: UserService = Depends(get_user_service),
) -> User:
    """Approve a registered seller or driver."""
    return await service.approve_user(user_id, actor_id)


# Stock endpoints


@router.get("/stock", response_model=list[StockResponse])
async def list_stock(
    seller_id: UUID | None = None,
    available: bool | None = None,
    actor_id: UUID = Depends(get_actor_id),
    service: StockService = Depends(get_stock_service),
) -> list[StockResponse]:
    """
    List stock lines.

    Sellers see their own lines; admins see every seller's, or one seller's
    when ``seller_id`` is given.
    """
    items = await service.list_stock(actor_id, seller_id=seller_id, available=available)
    return [StockResponse.from_item(item) for item in items]


@router.post(
    "/stock",
    response_model=StockItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_stock_item(
    draft: StockDraft,
    actor_id: UUID = Depends(get_actor_id),
    service: StockService = Depends(get_stock_service),
) -> StockItem:
    """Add a stock line. Seller lines wait for admin approval."""
    return await service.create_stock_item(draft, actor_id)


@router.patch("/stock/{item_id}", response_model=StockItem)
async def update_stock_item(
    item_id: UUID,
    update: StockUpdate,
    actor_id: UUID = Depends(get_actor_id),
    service: StockService = Depends(get_stock_service),
) -> StockItem:
    """Change a stock line's quantity."""
    return await service.update_stock_item(item_id, update, actor_id)


@router.patch("/stock/{item_id}/approve", response_model=StockItem)
async def approve_stock_item(
    item_id: UUID,
    actor_id: UUID = Depends(get_actor_id),
    service: StockService = Depends(get_stock_service),
) -> StockItem:
    """Approve a stock line so it can back new orders."""
    return await service.approve_stock_item(item_id, actor_id)


# Status metadata


@router.get("/transitions/{order_status}", response_model=StatusInfo)
async def get_status_info(order_status: OrderStatus) -> StatusInfo:
    """Label, terminality and next statuses for a status."""
    return StatusInfo(
        status=order_status,
        label=order_status.label,
        is_terminal=order_status.is_terminal,
        next_statuses=allowed_next_statuses(order_status),
    )
