"""Tests for data models."""

from datetime import date
from decimal import Decimal
from uuid import UUID

import pytest
from pydantic import ValidationError

from gift_organizer.models import Category, Gift, GiftStatus, Recipient, Slot


class TestRecipientAndCategory:
    """Tests for Recipient and Category models."""

    def test_create_generates_id(self):
        """New recipient gets a UUID."""
        recipient = Recipient(name="Alice")
        assert isinstance(recipient.id, UUID)

    def test_ids_are_unique(self):
        """Each recipient gets its own ID."""
        assert Recipient(name="A").id != Recipient(name="A").id

    def test_id_is_immutable(self):
        """Recipient ID cannot be reassigned."""
        recipient = Recipient(name="Alice")
        with pytest.raises(ValidationError):
            recipient.id = UUID(int=1)

    def test_hashable(self):
        """Categories can be used as set members."""
        toys = Category(name="Toys")
        assert toys in {toys}
        assert len({toys, toys.model_copy()}) == 1


class TestGift:
    """Tests for Gift model."""

    def test_create_minimal(self, alice, books):
        """Create gift with only required fields."""
        gift = Gift(name="Novel", price=Decimal("10"), recipient=alice, category=books)
        assert gift.status == GiftStatus.PENDING
        assert gift.description == ""
        assert gift.store == ""
        assert gift.purchase_date == date.today()
        assert isinstance(gift.id, UUID)

    def test_price_coerced_to_decimal(self, alice, books):
        """Price strings become exact decimals."""
        gift = Gift(name="Novel", price="12.30", recipient=alice, category=books)
        assert gift.price == Decimal("12.30")

    def test_status_values(self):
        """Status values match the stored strings."""
        assert GiftStatus.PENDING.value == "Pending"
        assert GiftStatus.PURCHASED.value == "Purchased"

    def test_rejects_unknown_status(self, alice, books):
        """Only Pending and Purchased are valid."""
        with pytest.raises(ValidationError):
            Gift(name="Novel", price="1", status="Shipped", recipient=alice, category=books)

    def test_embeds_recipient_copy(self, make_gift, alice):
        """Gift holds the recipient's data, not a link to it."""
        gift = make_gift()
        dumped = gift.model_dump(mode="json")
        assert dumped["recipient"] == {"id": str(alice.id), "name": "Alice"}


class TestSlot:
    """Tests for Slot enum."""

    def test_slot_names(self):
        assert [s.value for s in Slot] == ["gifts", "recipients", "categories"]

    def test_record_types(self):
        assert Slot.GIFTS.record_type is Gift
        assert Slot.RECIPIENTS.record_type is Recipient
        assert Slot.CATEGORIES.record_type is Category
