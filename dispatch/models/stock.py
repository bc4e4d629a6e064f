"""Seller inventory models."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from dispatch.models.order import utcnow


class StockItem(BaseModel):
    """Seller-owned inventory line."""

    id: UUID = Field(default_factory=uuid4)
    item_name: str
    quantity: int = Field(ge=0)
    seller_id: UUID
    approved: bool = False
    last_updated: datetime = Field(default_factory=utcnow)

    @property
    def is_available(self) -> bool:
        """Check if the item can back new orders at all."""
        return self.approved and self.quantity > 0


class StockDraft(BaseModel):
    """New stock line submitted by a seller, or by an admin for a seller."""

    item_name: str = Field(min_length=1)
    quantity: int = Field(ge=0)

    # Required when an admin adds stock on a seller's behalf
    seller_id: UUID | None = None

    @field_validator("item_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only names."""
        v = v.strip()
        if not v:
            raise ValueError("Item name must not be blank")
        return v


class StockUpdate(BaseModel):
    """New quantity for an existing stock line."""

    quantity: int = Field(ge=0)
