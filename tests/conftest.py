"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from _helper import make_order
from dispatch.api.dependencies import get_order_service, get_stock_service, get_user_service
from dispatch.main import app
from dispatch.models.order import Order, OrderDraft, OrderStatus
from dispatch.models.stock import StockItem
from dispatch.models.user import User, UserRole
from dispatch.services.order_service import OrderService
from dispatch.services.stock_service import StockService
from dispatch.services.user_service import UserService
from dispatch.state.repositories import (
    InMemoryOrderRepository,
    InMemoryStockRepository,
    InMemoryUserRepository,
)

# Actors


@pytest.fixture
def admin() -> User:
    """Create an approved admin."""
    return User(username="admin", role=UserRole.ADMIN, approved=True)


@pytest.fixture
def seller() -> User:
    """Create an approved seller."""
    return User(username="acme_store", role=UserRole.SELLER, approved=True)


@pytest.fixture
def other_seller() -> User:
    """Create a second approved seller."""
    return User(username="corner_shop", role=UserRole.SELLER, approved=True)


@pytest.fixture
def driver() -> User:
    """Create an approved driver."""
    return User(username="driver_sam", role=UserRole.DRIVER, approved=True)


@pytest.fixture
def other_driver() -> User:
    """Create a second approved driver."""
    return User(username="driver_lee", role=UserRole.DRIVER, approved=True)


@pytest.fixture
def unapproved_driver() -> User:
    """Create a driver still awaiting approval."""
    return User(username="driver_new", role=UserRole.DRIVER, approved=False)


@pytest.fixture
def directory(
    admin: User,
    seller: User,
    other_seller: User,
    driver: User,
    other_driver: User,
    unapproved_driver: User,
) -> dict:
    """All sample users keyed by id."""
    users = [admin, seller, other_seller, driver, other_driver, unapproved_driver]
    return {user.id: user for user in users}


# Stock and orders


@pytest.fixture
def widget_stock(seller: User) -> StockItem:
    """Approved stock of five widgets for the seller."""
    return StockItem(item_name="Widget", quantity=5, seller_id=seller.id, approved=True)


@pytest.fixture
def widget_draft() -> OrderDraft:
    """Draft order for three widgets."""
    return OrderDraft(
        customer_name="Jane Smith",
        customer_phone="+1234567891",
        delivery_street="456 Park Ave",
        delivery_city="New York",
        item="Widget",
        quantity=3,
    )


@pytest.fixture
def pending_order(seller: User) -> Order:
    """Pending order owned by the seller."""
    return make_order(seller)


@pytest.fixture
def assigned_order(seller: User, driver: User) -> Order:
    """Order assigned to the driver."""
    return make_order(seller, OrderStatus.ASSIGNED, driver)


@pytest.fixture
def in_transit_order(seller: User, driver: User) -> Order:
    """Order the driver is delivering."""
    return make_order(seller, OrderStatus.IN_TRANSIT, driver)


# Service and API


@pytest_asyncio.fixture
async def order_service(directory: dict, widget_stock: StockItem) -> OrderService:
    """Order service over in-memory repositories with sample users and stock."""
    users = InMemoryUserRepository()
    for user in directory.values():
        await users.save(user)

    stock = InMemoryStockRepository()
    await stock.save(widget_stock)

    return OrderService(InMemoryOrderRepository(), users, stock)


@pytest.fixture
def stock_service(order_service: OrderService) -> StockService:
    """Stock service sharing the order service's repositories."""
    return StockService(order_service.users, order_service.stock)


@pytest.fixture
def user_service(order_service: OrderService) -> UserService:
    """User service sharing the order service's repositories."""
    return UserService(order_service.users)


@pytest_asyncio.fixture
async def test_client(
    order_service: OrderService,
    stock_service: StockService,
    user_service: UserService,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client wired to the in-memory services."""
    app.dependency_overrides[get_order_service] = lambda: order_service
    app.dependency_overrides[get_stock_service] = lambda: stock_service
    app.dependency_overrides[get_user_service] = lambda: user_service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
