"""Tests for the role authorization policy."""

import pytest

from _helper import make_order
from dispatch.lifecycle.policy import (
    allowed_next_statuses_for,
    can_modify,
    can_request,
    can_view,
)
from dispatch.models.order import Order, OrderStatus
from dispatch.models.user import User


class TestSellerPolicy:
    """Sellers may only cancel their own pending orders."""

    def test_can_cancel_own_pending(self, seller: User, pending_order: Order) -> None:
        assert can_request(seller, pending_order, OrderStatus.CANCELED) is True

    def test_cannot_assign(self, seller: User, pending_order: Order) -> None:
        assert can_request(seller, pending_order, OrderStatus.ASSIGNED) is False

    def test_cannot_cancel_other_sellers_order(self, other_seller: User, pending_order: Order) -> None:
        assert can_request(other_seller, pending_order, OrderStatus.CANCELED) is False

    def test_cannot_cancel_after_assignment(self, seller: User, assigned_order: Order) -> None:
        assert can_request(seller, assigned_order, OrderStatus.CANCELED) is False

    @pytest.mark.parametrize("status", list(OrderStatus))
    def test_nothing_but_cancel(self, seller: User, in_transit_order: Order, status: OrderStatus) -> None:
        assert can_request(seller, in_transit_order, status) is False

    def test_unapproved_seller_denied(self, seller: User, pending_order: Order) -> None:
        unapproved = seller.model_copy(update={"approved": False})
        assert can_request(unapproved, pending_order, OrderStatus.CANCELED) is False


class TestDriverPolicy:
    """Drivers act only on orders bound to them."""

    def test_can_deliver_in_transit(self, driver: User, in_transit_order: Order) -> None:
        assert can_request(driver, in_transit_order, OrderStatus.DELIVERED) is True

    @pytest.mark.parametrize("status", list(OrderStatus))
    def test_never_assigned(self, driver: User, seller: User, status: OrderStatus) -> None:
        order = make_order(seller, status, driver if status != OrderStatus.PENDING else None)
        assert can_request(driver, order, OrderStatus.ASSIGNED) is False

    def test_not_bound_driver_denied(self, other_driver: User, in_transit_order: Order) -> None:
        assert can_request(other_driver, in_transit_order, OrderStatus.DELIVERED) is False

    def test_unbound_order_denied(self, driver: User, pending_order: Order) -> None:
        assert can_request(driver, pending_order, OrderStatus.CANCELED) is False

    def test_respects_table(self, driver: User, assigned_order: Order) -> None:
        assert can_request(driver, assigned_order, OrderStatus.IN_TRANSIT) is True
        assert can_request(driver, assigned_order, OrderStatus.DELIVERED) is False

    def test_unapproved_driver_denied(self, driver: User, in_transit_order: Order) -> None:
        unapproved = driver.model_copy(update={"approved": False})
        assert can_request(unapproved, in_transit_order, OrderStatus.DELIVERED) is False


class TestAdminPolicy:
    """Admins may request anything the table allows."""

    def test_can_assign_pending(self, admin: User, pending_order: Order) -> None:
        assert can_request(admin, pending_order, OrderStatus.ASSIGNED) is True

    def test_can_cancel_in_transit(self, admin: User, in_transit_order: Order) -> None:
        assert can_request(admin, in_transit_order, OrderStatus.CANCELED) is True

    def test_cannot_break_table(self, admin: User, assigned_order: Order) -> None:
        assert can_request(admin, assigned_order, OrderStatus.DELIVERED) is False
        assert can_request(admin, assigned_order, OrderStatus.PENDING) is False


def test_status_menus_per_role(
    admin: User,
    seller: User,
    driver: User,
    pending_order: Order,
    in_transit_order: Order,
) -> None:
    """Each role sees only the statuses it may request."""
    assert allowed_next_statuses_for(admin, pending_order) == [OrderStatus.ASSIGNED, OrderStatus.CANCELED]
    assert allowed_next_statuses_for(seller, pending_order) == [OrderStatus.CANCELED]
    assert allowed_next_statuses_for(driver, pending_order) == []
    assert allowed_next_statuses_for(driver, in_transit_order) == [
        OrderStatus.DELIVERED,
        OrderStatus.NO_ANSWER,
        OrderStatus.POSTPONED,
        OrderStatus.CANCELED,
    ]


def test_can_modify(
    admin: User,
    seller: User,
    other_seller: User,
    driver: User,
    pending_order: Order,
    assigned_order: Order,
) -> None:
    """Sellers edit their own pending orders; admins any live order."""
    assert can_modify(seller, pending_order) is True
    assert can_modify(seller, assigned_order) is False
    assert can_modify(other_seller, pending_order) is False
    assert can_modify(driver, pending_order) is False
    assert can_modify(admin, assigned_order) is True

    delivered = assigned_order.model_copy(update={"status": OrderStatus.DELIVERED})
    assert can_modify(admin, delivered) is False


def test_can_view(
    admin: User,
    seller: User,
    other_seller: User,
    driver: User,
    other_driver: User,
    assigned_order: Order,
) -> None:
    """Order lists are scoped by role."""
    assert can_view(admin, assigned_order)
    assert can_view(seller, assigned_order)
    assert not can_view(other_seller, assigned_order)
    assert can_view(driver, assigned_order)
    assert not can_view(other_driver, assigned_order)
