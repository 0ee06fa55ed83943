"""SQLite-based slot storage for Gift Organizer.

Implements the same read/write interface as JSONFileBackend, keeping each
slot's serialized collection in a single row.
"""

import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path


class SQLiteBackend:
    """Stores slots as rows of a SQLite table."""

    def __init__(self, db_path: Path | None = None):
        """Initialize SQLite backend.

        Args:
            db_path: Path to the SQLite database file. Defaults to ./data/gifts.db
        """
        if db_path is None:
            db_path = Path.cwd() / "data" / "gifts.db"
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_database()

    @contextmanager
    def _get_connection(self):
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_database(self) -> None:
        """Initialize database schema if not exists."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS slots (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def read(self, key: str) -> str | None:
        try:
            with self._get_connection() as conn:
                row = conn.execute("SELECT value FROM slots WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise OSError(f"sqlite read of '{key}' failed: {e}") from e
        return row[0] if row else None

    def write(self, key: str, text: str) -> None:
        try:
            with self._get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO slots (key, value, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, text, datetime.now().isoformat()),
                )
        except sqlite3.Error as e:
            raise OSError(f"sqlite write of '{key}' failed: {e}") from e
