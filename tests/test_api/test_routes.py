"""Tests for the HTTP API."""

import pytest
from httpx import AsyncClient

from dispatch.models.order import OrderDraft
from dispatch.models.user import User


def actor(user: User) -> dict[str, str]:
    """Header identifying the acting user."""
    return {"X-Actor-Id": str(user.id)}


async def create(client: AsyncClient, user: User, draft: OrderDraft) -> dict:
    response = await client.post(
        "/api/v1/orders",
        json=draft.model_dump(mode="json"),
        headers=actor(user),
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_health(test_client: AsyncClient) -> None:
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_create_and_fetch_order(
    test_client: AsyncClient,
    seller: User,
    widget_draft: OrderDraft,
) -> None:
    order = await create(test_client, seller, widget_draft)
    assert order["status"] == "pending"

    response = await test_client.get(f"/api/v1/orders/{order['id']}", headers=actor(seller))

    assert response.status_code == 200
    body = response.json()
    assert body["order"]["id"] == order["id"]
    assert body["allowed_statuses"] == ["canceled"]
    assert body["can_modify"] is True


@pytest.mark.asyncio
async def test_out_of_stock_is_422(
    test_client: AsyncClient,
    seller: User,
    widget_draft: OrderDraft,
) -> None:
    payload = widget_draft.model_dump(mode="json") | {"quantity": 9}

    response = await test_client.post("/api/v1/orders", json=payload, headers=actor(seller))

    assert response.status_code == 422
    assert response.json() == {
        "error": "out_of_stock",
        "detail": "Only 5 unit(s) available",
        "available": 5,
    }


@pytest.mark.asyncio
async def test_missing_actor_header(test_client: AsyncClient, widget_draft: OrderDraft) -> None:
    response = await test_client.post("/api/v1/orders", json=widget_draft.model_dump(mode="json"))

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_assign_and_deliver(
    test_client: AsyncClient,
    admin: User,
    seller: User,
    driver: User,
    widget_draft: OrderDraft,
) -> None:
    order = await create(test_client, seller, widget_draft)
    order_url = f"/api/v1/orders/{order['id']}"

    response = await test_client.patch(
        f"{order_url}/assign",
        json={"driver_id": str(driver.id)},
        headers=actor(admin),
    )
    assert response.status_code == 200
    assert response.json()["driver_id"] == str(driver.id)

    response = await test_client.patch(
        f"{order_url}/status",
        json={"status": "delivered"},
        headers=actor(driver),
    )
    assert response.status_code == 409
    assert response.json()["error"] == "illegal_transition"

    response = await test_client.patch(
        f"{order_url}/status",
        json={"status": "in_transit", "expected_status": "assigned"},
        headers=actor(driver),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "in_transit"


@pytest.mark.asyncio
async def test_assign_via_status_endpoint_needs_driver(
    test_client: AsyncClient,
    admin: User,
    seller: User,
    widget_draft: OrderDraft,
) -> None:
    order = await create(test_client, seller, widget_draft)

    response = await test_client.patch(
        f"/api/v1/orders/{order['id']}/status",
        json={"status": "assigned"},
        headers=actor(admin),
    )

    assert response.status_code == 422
    assert response.json()["error"] == "missing_parameter"


@pytest.mark.asyncio
async def test_unauthorized_is_403(
    test_client: AsyncClient,
    other_seller: User,
    seller: User,
    widget_draft: OrderDraft,
) -> None:
    order = await create(test_client, seller, widget_draft)

    response = await test_client.patch(
        f"/api/v1/orders/{order['id']}/status",
        json={"status": "canceled"},
        headers=actor(other_seller),
    )

    assert response.status_code == 403
    assert response.json()["error"] == "unauthorized"


@pytest.mark.asyncio
async def test_stale_order_is_409(
    test_client: AsyncClient,
    seller: User,
    widget_draft: OrderDraft,
) -> None:
    order = await create(test_client, seller, widget_draft)

    response = await test_client.patch(
        f"/api/v1/orders/{order['id']}/status",
        json={"status": "canceled", "expected_status": "assigned"},
        headers=actor(seller),
    )

    assert response.status_code == 409
    assert response.json()["error"] == "stale_order"


@pytest.mark.asyncio
async def test_stats_and_filter(
    test_client: AsyncClient,
    admin: User,
    seller: User,
    widget_draft: OrderDraft,
) -> None:
    first = await create(test_client, seller, widget_draft)
    await create(test_client, seller, widget_draft)
    await test_client.patch(
        f"/api/v1/orders/{first['id']}/status",
        json={"status": "canceled"},
        headers=actor(seller),
    )

    response = await test_client.get("/api/v1/orders/stats", headers=actor(admin))
    assert response.status_code == 200
    stats = response.json()
    assert stats["total"] == 2
    assert stats["by_status"]["pending"] == 1
    assert stats["by_status"]["canceled"] == 1
    assert stats["by_status"]["no_answer"] == 0

    response = await test_client.get("/api/v1/orders", params={"status": "pending"}, headers=actor(admin))
    assert response.status_code == 200
    assert len(response.json()) == stats["by_status"]["pending"]


@pytest.mark.asyncio
async def test_delete_order(
    test_client: AsyncClient,
    seller: User,
    widget_draft: OrderDraft,
) -> None:
    order = await create(test_client, seller, widget_draft)

    response = await test_client.delete(f"/api/v1/orders/{order['id']}", headers=actor(seller))
    assert response.status_code == 204

    response = await test_client.get(f"/api/v1/orders/{order['id']}", headers=actor(seller))
    assert response.status_code == 404
    assert response.json()["error"] == "order_not_found"


@pytest.mark.asyncio
async def test_eligible_drivers(
    test_client: AsyncClient,
    admin: User,
    driver: User,
    other_driver: User,
) -> None:
    response = await test_client.get("/api/v1/drivers/eligible", headers=actor(admin))

    assert response.status_code == 200
    assert {row["id"] for row in response.json()} == {str(driver.id), str(other_driver.id)}


@pytest.mark.asyncio
async def test_status_info(test_client: AsyncClient) -> None:
    response = await test_client.get("/api/v1/transitions/in_transit")

    assert response.status_code == 200
    assert response.json() == {
        "status": "in_transit",
        "label": "In Transit",
        "is_terminal": False,
        "next_statuses": ["delivered", "no_answer", "postponed", "canceled"],
    }


@pytest.mark.asyncio
async def test_approve_driver(
    test_client: AsyncClient,
    admin: User,
    seller: User,
    unapproved_driver: User,
) -> None:
    response = await test_client.get("/api/v1/users", params={"approved": "false"}, headers=actor(admin))
    assert response.status_code == 200
    assert [row["id"] for row in response.json()] == [str(unapproved_driver.id)]

    url = f"/api/v1/users/{unapproved_driver.id}/approve"
    response = await test_client.patch(url, headers=actor(seller))
    assert response.status_code == 403

    response = await test_client.patch(url, headers=actor(admin))
    assert response.status_code == 200
    assert response.json()["approved"] is True

    response = await test_client.get("/api/v1/drivers/eligible", headers=actor(admin))
    assert str(unapproved_driver.id) in {row["id"] for row in response.json()}


@pytest.mark.asyncio
async def test_stock_approval_flow(
    test_client: AsyncClient,
    admin: User,
    seller: User,
) -> None:
    """Seller adds a line, admin approves it, a recount sends it back."""
    response = await test_client.post(
        "/api/v1/stock",
        json={"item_name": "Gadget", "quantity": 4},
        headers=actor(seller),
    )
    assert response.status_code == 201
    item = response.json()
    assert item["approved"] is False

    response = await test_client.post(
        "/api/v1/stock",
        json={"item_name": "Gadget", "quantity": 1},
        headers=actor(seller),
    )
    assert response.status_code == 409
    assert response.json()["error"] == "stock_item_exists"

    response = await test_client.patch(f"/api/v1/stock/{item['id']}/approve", headers=actor(admin))
    assert response.status_code == 200
    assert response.json()["approved"] is True

    response = await test_client.get("/api/v1/stock", params={"available": "true"}, headers=actor(seller))
    assert response.status_code == 200
    assert {row["item_name"] for row in response.json()} == {"Gadget", "Widget"}
    assert all(row["is_available"] for row in response.json())

    response = await test_client.patch(
        f"/api/v1/stock/{item['id']}",
        json={"quantity": 6},
        headers=actor(seller),
    )
    assert response.status_code == 200
    assert response.json()["quantity"] == 6
    assert response.json()["approved"] is False


@pytest.mark.asyncio
async def test_unknown_stock_item_is_404(test_client: AsyncClient, admin: User) -> None:
    response = await test_client.patch(
        "/api/v1/stock/00000000-0000-0000-0000-000000000000/approve",
        headers=actor(admin),
    )

    assert response.status_code == 404
    assert response.json()["error"] == "item_not_found"
