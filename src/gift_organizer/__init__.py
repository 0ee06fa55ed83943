"""Gift Organizer - Track gifts, recipients, and categories."""

from .config import ConfigManager
from .data_store import (
    BackendType,
    JSONFileBackend,
    LoadResult,
    SlotBackend,
    SlotStore,
    create_slot_store,
)
from .errors import (
    ConfigError,
    GiftNotFoundError,
    GiftOrganizerError,
    GiftValidationError,
    PersistenceError,
    PositionOutOfRangeError,
)
from .gift_input import GiftInput, parse_price
from .gift_store import GiftStore
from .models import Category, Gift, GiftStatus, Recipient, Slot
from .query import query
from .sqlite_store import SQLiteBackend

__version__ = "0.1.0"

__all__ = [
    "BackendType",
    "Category",
    "ConfigError",
    "ConfigManager",
    "create_slot_store",
    "Gift",
    "GiftInput",
    "GiftNotFoundError",
    "GiftOrganizerError",
    "GiftStatus",
    "GiftStore",
    "GiftValidationError",
    "JSONFileBackend",
    "LoadResult",
    "parse_price",
    "PersistenceError",
    "PositionOutOfRangeError",
    "query",
    "Recipient",
    "Slot",
    "SlotBackend",
    "SlotStore",
    "SQLiteBackend",
]
