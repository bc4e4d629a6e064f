"""User and role models."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from dispatch.models.order import utcnow


class UserRole(str, Enum):
    """Roles an actor can hold."""

    ADMIN = "admin"
    SELLER = "seller"
    DRIVER = "driver"


class User(BaseModel):
    """Dashboard actor."""

    id: UUID = Field(default_factory=uuid4)
    username: str
    role: UserRole
    approved: bool = False
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_eligible_driver(self) -> bool:
        """Check if the user can be selected for an assignment."""
        return self.role == UserRole.DRIVER and self.approved
