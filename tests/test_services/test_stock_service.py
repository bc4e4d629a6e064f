"""Tests for the stock and user services over in-memory repositories."""

from uuid import uuid4

import pytest

from dispatch.lifecycle.errors import (
    ItemNotApproved,
    ItemNotFound,
    StockItemExists,
    Unauthorized,
    UserNotFound,
)
from dispatch.models.order import OrderDraft, OrderStatus
from dispatch.models.stock import StockDraft, StockItem, StockUpdate
from dispatch.models.user import User, UserRole
from dispatch.services.order_service import OrderService
from dispatch.services.stock_service import StockService
from dispatch.services.user_service import UserService


@pytest.mark.asyncio
async def test_seller_stock_needs_approval_before_orders(
    order_service: OrderService,
    stock_service: StockService,
    admin: User,
    seller: User,
    widget_draft: OrderDraft,
) -> None:
    """A new seller line backs orders only after an admin approves it."""
    item = await stock_service.create_stock_item(StockDraft(item_name="Gadget", quantity=4), seller.id)
    draft = widget_draft.model_copy(update={"item": "Gadget", "quantity": 2})

    with pytest.raises(ItemNotApproved):
        await order_service.create_order(draft, seller.id)

    approved = await stock_service.approve_stock_item(item.id, admin.id)
    assert approved.approved is True

    order = await order_service.create_order(draft, seller.id)
    assert order.status == OrderStatus.PENDING


@pytest.mark.asyncio
async def test_recount_sends_line_back_for_approval(
    order_service: OrderService,
    stock_service: StockService,
    seller: User,
    widget_stock: StockItem,
    widget_draft: OrderDraft,
) -> None:
    updated = await stock_service.update_stock_item(widget_stock.id, StockUpdate(quantity=9), seller.id)

    assert updated.quantity == 9
    assert updated.approved is False
    stored = await stock_service.stock.fetch_stock_item(seller.id, "Widget")
    assert stored == updated

    with pytest.raises(ItemNotApproved):
        await order_service.create_order(widget_draft, seller.id)


@pytest.mark.asyncio
async def test_duplicate_line_rejected(stock_service: StockService, seller: User) -> None:
    with pytest.raises(StockItemExists):
        await stock_service.create_stock_item(StockDraft(item_name="Widget", quantity=1), seller.id)


@pytest.mark.asyncio
async def test_unknown_stock_item(stock_service: StockService, admin: User) -> None:
    with pytest.raises(ItemNotFound):
        await stock_service.approve_stock_item(uuid4(), admin.id)


@pytest.mark.asyncio
async def test_seller_cannot_approve_stock(
    stock_service: StockService,
    seller: User,
    widget_stock: StockItem,
) -> None:
    with pytest.raises(Unauthorized):
        await stock_service.approve_stock_item(widget_stock.id, seller.id)


@pytest.mark.asyncio
async def test_list_stock_is_scoped(
    stock_service: StockService,
    admin: User,
    seller: User,
    other_seller: User,
    driver: User,
) -> None:
    """Sellers see their own lines; the availability filter uses approval and quantity."""
    await stock_service.create_stock_item(StockDraft(item_name="Gadget", quantity=4), seller.id)
    await stock_service.create_stock_item(StockDraft(item_name="Gizmo", quantity=2), other_seller.id)

    own = await stock_service.list_stock(seller.id)
    assert [item.item_name for item in own] == ["Gadget", "Widget"]

    available = await stock_service.list_stock(seller.id, available=True)
    assert [item.item_name for item in available] == ["Widget"]

    everything = await stock_service.list_stock(admin.id)
    assert len(everything) == 3
    assert len(await stock_service.list_stock(admin.id, seller_id=other_seller.id)) == 1

    # Sellers cannot widen their view with seller_id
    assert len(await stock_service.list_stock(seller.id, seller_id=other_seller.id)) == 2

    with pytest.raises(Unauthorized):
        await stock_service.list_stock(driver.id)


@pytest.mark.asyncio
async def test_approved_driver_becomes_assignable(
    order_service: OrderService,
    user_service: UserService,
    admin: User,
    seller: User,
    unapproved_driver: User,
    widget_draft: OrderDraft,
) -> None:
    """Approving a driver is what makes them eligible for assignments."""
    order = await order_service.create_order(widget_draft, seller.id)

    approved = await user_service.approve_user(unapproved_driver.id, admin.id)
    assert approved.approved is True

    drivers = await order_service.eligible_drivers(admin.id)
    assert unapproved_driver.id in {user.id for user in drivers}

    assigned = await order_service.assign(order.id, unapproved_driver.id, admin.id)
    assert assigned.driver_id == unapproved_driver.id


@pytest.mark.asyncio
async def test_approve_user_rejections(
    user_service: UserService,
    seller: User,
    admin: User,
    unapproved_driver: User,
) -> None:
    with pytest.raises(Unauthorized):
        await user_service.approve_user(unapproved_driver.id, seller.id)

    with pytest.raises(UserNotFound):
        await user_service.approve_user(uuid4(), admin.id)

    stored = await user_service.users.fetch_user(unapproved_driver.id)
    assert stored.approved is False


@pytest.mark.asyncio
async def test_list_users_filters(
    user_service: UserService,
    admin: User,
    seller: User,
    unapproved_driver: User,
) -> None:
    pending = await user_service.list_users(admin.id, approved=False)
    assert [user.id for user in pending] == [unapproved_driver.id]

    drivers = await user_service.list_users(admin.id, role=UserRole.DRIVER)
    assert len(drivers) == 3

    with pytest.raises(Unauthorized):
        await user_service.list_users(seller.id)
