"""Exceptions raised by Gift Organizer."""

from pathlib import Path
from uuid import UUID


class GiftOrganizerError(Exception):
    """Base class for Gift Organizer errors."""


class PersistenceError(GiftOrganizerError):
    """Raised when a collection cannot be encoded or written."""

    def __init__(self, slot: str, reason: str):
        self.slot = slot
        self.reason = reason
        super().__init__(f"Could not save '{slot}': {reason}")


class PositionOutOfRangeError(GiftOrganizerError):
    """Raised when a delete names a position outside the collection."""

    def __init__(self, positions: list[int], size: int):
        self.positions = positions
        self.size = size
        joined = ", ".join(str(p) for p in positions)
        super().__init__(f"Position(s) {joined} out of range for collection of size {size}")


class GiftValidationError(GiftOrganizerError):
    """Raised when gift input fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class GiftNotFoundError(GiftOrganizerError):
    """Raised when a gift is not found."""

    def __init__(self, gift_id: UUID | str):
        self.gift_id = gift_id
        super().__init__(f"Gift with ID '{gift_id}' not found")


class ConfigError(GiftOrganizerError):
    """Raised when the config file holds an unusable value."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"Invalid config {path}: {message}")
