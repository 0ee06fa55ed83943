"""Tests for gift store operations."""

from decimal import Decimal
from uuid import uuid4

import pytest

from gift_organizer.data_store import JSONFileBackend, SlotStore
from gift_organizer.errors import PersistenceError, PositionOutOfRangeError
from gift_organizer.gift_store import GiftStore
from gift_organizer.models import Category, GiftStatus, Recipient, Slot


def reopen(temp_data_dir) -> GiftStore:
    """Build a fresh store over the same directory."""
    return GiftStore(SlotStore(JSONFileBackend(data_dir=temp_data_dir)))


class TestHydration:
    """Tests for loading at construction."""

    def test_empty_storage(self, gift_store):
        assert gift_store.gifts == []
        assert gift_store.recipients == []
        assert gift_store.categories == []
        assert gift_store.load_errors == {}

    def test_loads_existing_collections(self, slot_store, make_gift, alice, books):
        gift = make_gift()
        slot_store.save(Slot.GIFTS, [gift])
        slot_store.save(Slot.RECIPIENTS, [alice])
        slot_store.save(Slot.CATEGORIES, [books])

        store = GiftStore(slot_store)
        assert store.gifts == [gift]
        assert store.recipients == [alice]
        assert store.categories == [books]

    def test_corrupt_slot_recorded(self, temp_data_dir, slot_store, alice):
        slot_store.save(Slot.RECIPIENTS, [alice])
        (temp_data_dir / "gifts.json").write_text("corrupt")

        store = GiftStore(slot_store)
        assert store.gifts == []
        assert store.recipients == [alice]
        assert set(store.load_errors) == {Slot.GIFTS}

    def test_read_access_returns_copies(self, gift_store, alice):
        """Mutating a returned list does not change the store."""
        gift_store.add_recipient(alice)
        gift_store.recipients.clear()
        assert gift_store.recipients == [alice]


class TestAdd:
    """Tests for adding records."""

    def test_add_preserves_order(self, gift_store, make_gift):
        r1, r2, r3 = make_gift("One"), make_gift("Two"), make_gift("Three")
        for gift in (r1, r2, r3):
            gift_store.add_gift(gift)
        assert gift_store.gifts == [r1, r2, r3]

    def test_add_persists_immediately(self, gift_store, temp_data_dir, make_gift):
        gift = make_gift()
        gift_store.add_gift(gift)
        assert reopen(temp_data_dir).gifts == [gift]

    def test_add_recipient_and_category(self, gift_store, temp_data_dir):
        gift_store.add_recipient(Recipient(name="Alice"))
        gift_store.add_recipient(Recipient(name="Bob"))
        gift_store.add_category(Category(name="Toys"))

        reopened = reopen(temp_data_dir)
        assert [r.name for r in reopened.recipients] == ["Alice", "Bob"]
        assert [c.name for c in reopened.categories] == ["Toys"]

    def test_add_performs_no_validation(self, gift_store, make_gift):
        """Store accepts whatever the caller already checked."""
        gift_store.add_gift(make_gift(name=""))
        assert len(gift_store.gifts) == 1


class TestGetGift:
    def test_get_existing(self, gift_store, make_gift):
        gift = make_gift()
        gift_store.add_gift(gift)
        assert gift_store.get_gift(gift.id) == gift

    def test_get_missing(self, gift_store):
        assert gift_store.get_gift(uuid4()) is None


class TestUpdateGift:
    """Tests for replacing gifts by ID."""

    def test_update_replaces_in_place(self, gift_store, make_gift, temp_data_dir):
        a, b, c = make_gift("A"), make_gift("B"), make_gift("C")
        for gift in (a, b, c):
            gift_store.add_gift(gift)

        edited = b.model_copy(update={"name": "B2", "status": GiftStatus.PURCHASED})
        assert gift_store.update_gift(edited) is True

        assert [g.name for g in gift_store.gifts] == ["A", "B2", "C"]
        assert gift_store.gifts[1].id == b.id
        assert reopen(temp_data_dir).gifts[1].status == GiftStatus.PURCHASED

    def test_update_unknown_id_is_noop(self, gift_store, make_gift, temp_data_dir):
        original = make_gift("A")
        gift_store.add_gift(original)
        before = (temp_data_dir / "gifts.json").read_text()

        assert gift_store.update_gift(make_gift("Stranger")) is False
        assert gift_store.gifts == [original]
        assert (temp_data_dir / "gifts.json").read_text() == before


class TestDelete:
    """Tests for deleting by position."""

    def test_delete_middle(self, gift_store, make_gift):
        a, b, c = make_gift("A"), make_gift("B"), make_gift("C")
        for gift in (a, b, c):
            gift_store.add_gift(gift)

        removed = gift_store.delete_gifts({1})
        assert removed == [b]
        assert gift_store.gifts == [a, c]

    def test_delete_several(self, gift_store, make_gift, temp_data_dir):
        gifts = [make_gift(n) for n in "ABCDE"]
        for gift in gifts:
            gift_store.add_gift(gift)

        removed = gift_store.delete_gifts([4, 0, 2, 2])
        assert [g.name for g in removed] == ["A", "C", "E"]
        assert [g.name for g in reopen(temp_data_dir).gifts] == ["B", "D"]

    @pytest.mark.parametrize("bad", [3, -1, 100])
    def test_out_of_range_raises_and_keeps_collection(self, gift_store, make_gift, bad):
        gifts = [make_gift(n) for n in "ABC"]
        for gift in gifts:
            gift_store.add_gift(gift)

        with pytest.raises(PositionOutOfRangeError) as exc_info:
            gift_store.delete_gifts([0, bad])
        assert exc_info.value.positions == [bad]
        assert exc_info.value.size == 3
        assert gift_store.gifts == gifts

    def test_delete_nothing(self, gift_store, make_gift):
        gift_store.add_gift(make_gift())
        assert gift_store.delete_gifts([]) == []
        assert len(gift_store.gifts) == 1

    def test_delete_from_empty_collection(self, gift_store):
        with pytest.raises(PositionOutOfRangeError):
            gift_store.delete_recipients([0])

    def test_delete_recipient_keeps_gift_snapshot(self, gift_store, make_gift, alice):
        """Gifts keep their embedded copy when the recipient is removed."""
        gift_store.add_recipient(alice)
        gift_store.add_gift(make_gift(recipient=alice))

        gift_store.delete_recipients([0])
        assert gift_store.recipients == []
        assert gift_store.gifts[0].recipient == alice

    def test_delete_category(self, gift_store, temp_data_dir):
        gift_store.add_category(Category(name="Toys"))
        gift_store.add_category(Category(name="Books"))
        gift_store.delete_categories([0])
        assert [c.name for c in reopen(temp_data_dir).categories] == ["Books"]


class TestSnapshotSemantics:
    def test_new_recipient_record_does_not_reach_gift(self, gift_store, make_gift, alice):
        """A gift's recipient is a copy fixed at creation."""
        gift_store.add_recipient(alice)
        gift_store.add_gift(make_gift(recipient=alice))

        renamed = Recipient(id=alice.id, name="Alicia")
        gift_store.delete_recipients([0])
        gift_store.add_recipient(renamed)

        assert gift_store.gifts[0].recipient.name == "Alice"


class ReadOnlyBackend:
    """Backend that loads nothing and refuses to write."""

    def read(self, key):
        return None

    def write(self, key, text):
        raise OSError("read-only file system")


class TestSaveFailure:
    def test_failed_save_surfaces_and_keeps_memory(self, make_gift):
        store = GiftStore(SlotStore(ReadOnlyBackend()))
        gift = make_gift(price=Decimal("5"))
        with pytest.raises(PersistenceError):
            store.add_gift(gift)
        assert store.gifts == [gift]
