"""Data persistence for Gift Organizer.

Each collection is stored whole under a named slot in a flat key-value
backend: one JSON file per slot (default) or one row per slot in SQLite.
Use create_slot_store() to get a SlotStore over the configured backend.
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, Sequence

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import PersistenceError
from .models import STORED, Slot

logger = logging.getLogger(__name__)


class BackendType(str, Enum):
    """Data storage backend types."""

    JSON = "json"
    SQLITE = "sqlite"


class SlotBackend(Protocol):
    """Protocol for a flat key-value store of text values."""

    def read(self, key: str) -> str | None: ...
    def write(self, key: str, text: str) -> None: ...


class JSONFileBackend:
    """Stores each slot as ``<data_dir>/<key>.json``."""

    def __init__(self, data_dir: Path | None = None):
        """Initialize file backend.

        Args:
            data_dir: Directory for slot files. Defaults to ./data
        """
        self.data_dir = data_dir or Path.cwd() / "data"
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _slot_path(self, key: str) -> Path:
        """Path to a slot file."""
        return self.data_dir / f"{key}.json"

    def read(self, key: str) -> str | None:
        path = self._slot_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, text: str) -> None:
        # Write beside the target and swap it in so readers never see a partial file.
        fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            tmp_path.replace(self._slot_path(key))
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


@dataclass
class LoadResult:
    """Records read from a slot plus the reason decoding failed, if it did."""

    slot: Slot
    records: list = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SlotStore:
    """Serializes whole collections to and from backend slots."""

    def __init__(self, backend: SlotBackend):
        self.backend = backend

    def save(self, slot: Slot, records: Sequence[BaseModel]) -> None:
        """Overwrite a slot with the given records, in order.

        Args:
            slot: Slot to write
            records: Full ordered collection

        Raises:
            PersistenceError: If the records cannot be encoded or written
        """
        try:
            text = json.dumps([r.model_dump(mode="json") for r in records], indent=2)
        except (TypeError, ValueError) as e:
            raise PersistenceError(slot.value, f"encoding failed: {e}") from e

        try:
            self.backend.write(slot.value, text)
        except OSError as e:
            raise PersistenceError(slot.value, f"write failed: {e}") from e

        logger.debug("Saved %d record(s) to slot '%s'", len(records), slot.value)

    def load_result(self, slot: Slot) -> LoadResult:
        """Read a slot, reporting decode failures instead of raising.

        An absent slot yields an empty, successful result. Unreadable data
        yields an empty result with ``error`` set.
        """
        try:
            text = self.backend.read(slot.value)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read slot '%s': %s", slot.value, e)
            return LoadResult(slot=slot, error=f"read failed: {e}")

        if text is None:
            logger.debug("Slot '%s' is empty", slot.value)
            return LoadResult(slot=slot)

        adapter = TypeAdapter(list[slot.record_type])
        try:
            records = adapter.validate_json(text, context=STORED)
        except ValidationError as e:
            logger.warning(
                "Discarding unreadable data in slot '%s' (%d error(s))",
                slot.value,
                e.error_count(),
            )
            return LoadResult(slot=slot, error=f"decode failed: {e.error_count()} error(s)")

        logger.debug("Loaded %d record(s) from slot '%s'", len(records), slot.value)
        return LoadResult(slot=slot, records=records)

    def load(self, slot: Slot) -> list:
        """Read a slot; absent or unreadable data gives an empty list."""
        return self.load_result(slot).records


def create_slot_store(
    backend: BackendType = BackendType.JSON,
    data_dir: Path | None = None,
    db_path: Path | None = None,
) -> SlotStore:
    """Create a slot store with the specified backend.

    Args:
        backend: Which backend to use (json or sqlite)
        data_dir: Directory for slot files (used by JSON backend, also used
                  as base path for SQLite if db_path not specified)
        db_path: Path to SQLite database file (only used by SQLite backend)

    Returns:
        A SlotStore over the chosen backend
    """
    if backend == BackendType.SQLITE:
        from .sqlite_store import SQLiteBackend

        if db_path is None and data_dir is not None:
            db_path = data_dir / "gifts.db"
        return SlotStore(SQLiteBackend(db_path=db_path))

    return SlotStore(JSONFileBackend(data_dir=data_dir))
