"""Order-related data models."""

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from dispatch.config import get_settings


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class OrderStatus(str, Enum):
    """Order status progression."""

    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELED = "canceled"
    NO_ANSWER = "no_answer"
    POSTPONED = "postponed"

    @property
    def label(self) -> str:
        """Human-readable label shown on chips and menus."""
        return self.value.replace("_", " ").title()

    @property
    def is_terminal(self) -> bool:
        """Delivered and canceled orders accept no further transitions."""
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELED)


# Statuses an order may hold without a bound driver
UNBOUND_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.CANCELED})


class Order(BaseModel):
    """A delivery task from a seller to a customer."""

    id: UUID = Field(default_factory=uuid4)
    status: OrderStatus = OrderStatus.PENDING

    # Customer and destination
    customer_name: str
    customer_phone: str
    delivery_street: str
    delivery_city: str
    delivery_location: str | None = None

    # Goods
    item: str
    quantity: int = Field(ge=1)

    # Assignments
    seller_id: UUID
    driver_id: UUID | None = None

    # Timing
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    comment: str | None = None

    @property
    def is_terminal(self) -> bool:
        """Check if the order has reached a terminal status."""
        return self.status.is_terminal

    @model_validator(mode="after")
    def validate_driver_bound(self) -> "Order":
        """Every status past pending, except canceled, needs a driver."""
        if self.status not in UNBOUND_STATUSES and self.driver_id is None:
            raise ValueError(f"An order in status {self.status.value} must have a driver")
        return self


class OrderDraft(BaseModel):
    """Fields submitted by a seller (or an admin) to create an order."""

    customer_name: str = Field(min_length=1)
    customer_phone: str = Field(min_length=1)
    delivery_street: str = Field(min_length=1)
    delivery_city: str = Field(min_length=1)
    delivery_location: str | None = None
    item: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    comment: str | None = None

    # Required when an admin creates the order on a seller's behalf
    seller_id: UUID | None = None

    @field_validator("customer_name", "customer_phone", "delivery_street", "delivery_city", "item")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only values."""
        v = v.strip()
        if not v:
            raise ValueError("Field must not be blank")
        return v

    @field_validator("delivery_location")
    @classmethod
    def validate_map_link(cls, v: str | None) -> str | None:
        """Only accept links to a known map provider."""
        if not v:
            return None
        prefixes = get_settings().allowed_map_prefixes
        if not any(v.startswith(prefix) for prefix in prefixes):
            raise ValueError(f"Delivery location must be a map link starting with one of {prefixes}")
        return v
