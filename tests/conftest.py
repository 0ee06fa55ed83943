"""Shared test fixtures for Gift Organizer."""

from datetime import date
from decimal import Decimal

import pytest

from gift_organizer.data_store import JSONFileBackend, SlotStore
from gift_organizer.gift_store import GiftStore
from gift_organizer.models import Category, Gift, GiftStatus, Recipient


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create a temporary data directory."""
    data_dir = tmp_path / "test_data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def slot_store(temp_data_dir):
    """Create a SlotStore backed by JSON files in a temporary directory."""
    return SlotStore(JSONFileBackend(data_dir=temp_data_dir))


@pytest.fixture
def gift_store(slot_store):
    """Create a GiftStore with temporary storage."""
    return GiftStore(slot_store)


@pytest.fixture
def alice():
    return Recipient(name="Alice")


@pytest.fixture
def books():
    return Category(name="Books")


@pytest.fixture
def make_gift(alice, books):
    """Factory for gifts with sensible defaults."""

    def _make(name: str = "Novel", **overrides) -> Gift:
        fields = dict(
            name=name,
            description="Hardcover",
            status=GiftStatus.PENDING,
            price=Decimal("19.99"),
            store="Bookshop",
            purchase_date=date(2026, 12, 1),
            recipient=alice,
            category=books,
        )
        fields.update(overrides)
        return Gift(**fields)

    return _make
