"""Core data models for Gift Organizer."""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

# Validation context for records read back from storage.
STORED = {"stored": True}


class GiftStatus(str, Enum):
    """Purchase status of a gift."""

    PENDING = "Pending"
    PURCHASED = "Purchased"


class StoredRecord(BaseModel):
    """Base for persisted records.

    Defaults fill in fields for new records only. Under the STORED context
    every field must be present, so incomplete stored data fails to decode.
    """

    @model_validator(mode="before")
    @classmethod
    def _require_all_stored_fields(cls, data: Any, info: ValidationInfo) -> Any:
        if info.context and info.context.get("stored") and isinstance(data, dict):
            missing = [name for name in cls.model_fields if name not in data]
            if missing:
                raise ValueError(f"missing stored field(s): {', '.join(missing)}")
        return data


class Recipient(StoredRecord):
    """A person gifts are bought for."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str


class Category(StoredRecord):
    """A grouping label for gifts."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str


class Gift(StoredRecord):
    """A tracked gift.

    ``recipient`` and ``category`` are copies taken when the gift was created
    or last edited; later changes to the recipient or category collections
    do not reach them.
    """

    id: UUID = Field(default_factory=uuid4)
    name: str
    description: str = ""
    status: GiftStatus = GiftStatus.PENDING
    price: Decimal
    store: str = ""
    purchase_date: date = Field(default_factory=date.today)
    recipient: Recipient
    category: Category


class Slot(str, Enum):
    """Named storage slots, one per collection."""

    GIFTS = "gifts"
    RECIPIENTS = "recipients"
    CATEGORIES = "categories"

    @property
    def record_type(self) -> type[BaseModel]:
        """Model class stored in this slot."""
        return _SLOT_RECORD_TYPES[self]


_SLOT_RECORD_TYPES: dict[Slot, type[BaseModel]] = {
    Slot.GIFTS: Gift,
    Slot.RECIPIENTS: Recipient,
    Slot.CATEGORIES: Category,
}
