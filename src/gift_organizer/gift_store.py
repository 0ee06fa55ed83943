"""In-memory gift, recipient and category collections with persistence."""

import logging
from collections.abc import Iterable
from uuid import UUID

from pydantic import BaseModel

from .data_store import SlotStore
from .errors import PositionOutOfRangeError
from .models import Category, Gift, Recipient, Slot

logger = logging.getLogger(__name__)


class GiftStore:
    """Owns the three collections and saves each one whole after every change.

    Construct once and hand the instance to every consumer. Collections are
    loaded eagerly; slots that could not be decoded start empty and are
    listed in ``load_errors``.
    """

    def __init__(self, slot_store: SlotStore):
        """Initialize gift store.

        Args:
            slot_store: Persistence adapter used for every load and save
        """
        self.slot_store = slot_store
        self.load_errors: dict[Slot, str] = {}
        self._collections: dict[Slot, list] = {}

        for slot in Slot:
            result = slot_store.load_result(slot)
            if not result.ok:
                self.load_errors[slot] = result.error
            self._collections[slot] = result.records

    # --- Read access ---

    @property
    def gifts(self) -> list[Gift]:
        return list(self._collections[Slot.GIFTS])

    @property
    def recipients(self) -> list[Recipient]:
        return list(self._collections[Slot.RECIPIENTS])

    @property
    def categories(self) -> list[Category]:
        return list(self._collections[Slot.CATEGORIES])

    def get_gift(self, gift_id: UUID) -> Gift | None:
        """Get a gift by ID.

        Args:
            gift_id: UUID of the gift

        Returns:
            Gift if found, None otherwise
        """
        for gift in self._collections[Slot.GIFTS]:
            if gift.id == gift_id:
                return gift
        return None

    # --- Gift commands ---

    def add_gift(self, gift: Gift) -> None:
        self._append(Slot.GIFTS, gift)

    def update_gift(self, gift: Gift) -> bool:
        """Replace the stored gift with the same ID, keeping its position.

        Args:
            gift: Full replacement record

        Returns:
            True if a gift was replaced, False if no gift has that ID
        """
        gifts = self._collections[Slot.GIFTS]
        for i, existing in enumerate(gifts):
            if existing.id == gift.id:
                gifts[i] = gift
                self._save(Slot.GIFTS)
                return True

        logger.debug("update_gift: no gift with id %s", gift.id)
        return False

    def delete_gifts(self, positions: Iterable[int]) -> list[Gift]:
        return self._delete(Slot.GIFTS, positions)

    # --- Recipient commands ---

    def add_recipient(self, recipient: Recipient) -> None:
        self._append(Slot.RECIPIENTS, recipient)

    def delete_recipients(self, positions: Iterable[int]) -> list[Recipient]:
        return self._delete(Slot.RECIPIENTS, positions)

    # --- Category commands ---

    def add_category(self, category: Category) -> None:
        self._append(Slot.CATEGORIES, category)

    def delete_categories(self, positions: Iterable[int]) -> list[Category]:
        return self._delete(Slot.CATEGORIES, positions)

    # --- Internals ---

    def _append(self, slot: Slot, record: BaseModel) -> None:
        self._collections[slot].append(record)
        self._save(slot)

    def _delete(self, slot: Slot, positions: Iterable[int]) -> list:
        """Remove records at the given positions.

        Args:
            slot: Collection to delete from
            positions: 0-based positions in the current order

        Returns:
            Removed records, in their original order

        Raises:
            PositionOutOfRangeError: If any position is outside the collection;
                nothing is removed in that case
        """
        records = self._collections[slot]
        wanted = set(positions)
        if not wanted:
            return []

        invalid = sorted(p for p in wanted if p < 0 or p >= len(records))
        if invalid:
            raise PositionOutOfRangeError(invalid, len(records))

        removed = [r for i, r in enumerate(records) if i in wanted]
        self._collections[slot] = [r for i, r in enumerate(records) if i not in wanted]
        self._save(slot)
        return removed

    def _save(self, slot: Slot) -> None:
        self.slot_store.save(slot, self._collections[slot])
