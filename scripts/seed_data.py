"""Seed demo users, stock and orders for the dispatch dashboard."""

import asyncio

from dispatch.lifecycle import engine
from dispatch.models.order import OrderDraft, OrderStatus
from dispatch.models.stock import StockItem
from dispatch.models.user import User, UserRole
from dispatch.state.manager import StateManager
from dispatch.state.redis_repositories import (
    RedisOrderRepository,
    RedisStockRepository,
    RedisUserRepository,
)


def build_users() -> list[User]:
    """Demo actors, including one driver still awaiting approval."""
    return [
        User(username="admin", role=UserRole.ADMIN, approved=True),
        User(username="acme_store", role=UserRole.SELLER, approved=True),
        User(username="corner_shop", role=UserRole.SELLER, approved=True),
        User(username="driver_sam", role=UserRole.DRIVER, approved=True),
        User(username="driver_lee", role=UserRole.DRIVER, approved=True),
        User(username="driver_new", role=UserRole.DRIVER, approved=False),
    ]


async def seed_users(users: RedisUserRepository) -> dict[str, User]:
    """Seed dashboard users."""
    print("Seeding users...")

    seeded = {}
    for user in build_users():
        await users.save(user)
        seeded[user.username] = user
        print(f"  ✓ Added {user.username} ({user.role.value}, approved: {user.approved})")

    print("✓ Users seeded successfully\n")
    return seeded


async def seed_stock(stock: RedisStockRepository, sellers: list[User]) -> None:
    """Seed stock lines for each seller."""
    print("Seeding stock...")

    lines = [
        ("Widget", 50, True),
        ("Gadget", 20, True),
        ("Gizmo", 5, True),
        ("Prototype", 10, False),
    ]

    for seller in sellers:
        for item_name, quantity, approved in lines:
            await stock.save(
                StockItem(
                    item_name=item_name,
                    quantity=quantity,
                    seller_id=seller.id,
                    approved=approved,
                )
            )
            print(f"  ✓ {seller.username}: {item_name} x{quantity} (approved: {approved})")

    print("✓ Stock seeded successfully\n")


async def seed_orders(
    orders: RedisOrderRepository,
    stock: RedisStockRepository,
    users: dict[str, User],
) -> None:
    """Seed orders at several points of the lifecycle."""
    print("Seeding orders...")

    seller = users["acme_store"]
    admin = users["admin"]
    driver = users["driver_sam"]
    directory = {driver.id: driver}

    drafts = [
        OrderDraft(
            customer_name="Jane Smith",
            customer_phone="+1234567891",
            delivery_street="456 Park Ave",
            delivery_city="New York",
            item="Widget",
            quantity=3,
        ),
        OrderDraft(
            customer_name="Bob Wilson",
            customer_phone="+1234567892",
            delivery_street="789 Broadway",
            delivery_city="New York",
            delivery_location="https://maps.google.com/?q=789+Broadway",
            item="Gadget",
            quantity=1,
        ),
        OrderDraft(
            customer_name="John Doe",
            customer_phone="+1234567890",
            delivery_street="123 Main St",
            delivery_city="New York",
            item="Gizmo",
            quantity=2,
            comment="Ring twice",
        ),
    ]

    # Second order gets assigned, third goes out for delivery
    paths: list[list[OrderStatus]] = [
        [],
        [OrderStatus.ASSIGNED],
        [OrderStatus.ASSIGNED, OrderStatus.IN_TRANSIT],
    ]

    for draft, path in zip(drafts, paths):
        stock_item = await stock.fetch_stock_item(seller.id, draft.item)
        order = engine.create_order(draft, seller, stock_item)

        for to_status in path:
            actor = admin if to_status == OrderStatus.ASSIGNED else driver
            order = engine.request_transition(
                order,
                to_status,
                actor,
                driver_id=driver.id,
                users=directory,
            )

        await orders.add(order)
        print(f"  ✓ Order for {order.customer_name}: {order.item} x{order.quantity} ({order.status.label})")

    print("✓ Orders seeded successfully\n")


async def main() -> None:
    """Run all seed functions."""
    print("\n" + "=" * 50)
    print("  Seeding Dispatch Data")
    print("=" * 50 + "\n")

    state_manager = StateManager()
    await state_manager.connect()

    order_repo = RedisOrderRepository(state_manager)
    user_repo = RedisUserRepository(state_manager)
    stock_repo = RedisStockRepository(state_manager)

    users = await seed_users(user_repo)
    sellers = [user for user in users.values() if user.role == UserRole.SELLER]
    await seed_stock(stock_repo, sellers)
    await seed_orders(order_repo, stock_repo, users)

    await state_manager.disconnect()

    print("=" * 50)
    print("  ✓ All data seeded successfully!")
    print("=" * 50 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
