"""
ProgressStore - Persist hizb done flags in ~/.hizbtracker/progress.db.

Progress lives in a single key-value slot holding {"done": [60 booleans]}
as JSON text. It is kept apart from the mapping file so the mapping can
be regenerated without losing progress.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from hizbtracker.config import DEFAULT_PROGRESS_DB, PROGRESS_KEY, TOTAL_DIVISIONS
from hizbtracker.schemas import ProgressSnapshot, default_done

logger = logging.getLogger(__name__)


class ProgressStore:
    """
    Load and save the done flags in SQLite.

    Loading is best effort: anything unreadable falls back to all-false.
    """

    def __init__(self, db_path: Optional[Path] = None, key: str = PROGRESS_KEY):
        """
        Initialize progress store.

        Args:
            db_path: Path to progress.db (default: ~/.hizbtracker/progress.db)
            key: Slot key; bump the version suffix to start fresh
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self.key = key
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            conn = sqlite3.connect(str(self.db_path))
            try:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                """)
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            # Progress is best effort; load() falls back to defaults
            logger.warning(f"Progress database {self.db_path} unusable: {e}")

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        return sqlite3.connect(str(self.db_path))

    # -------------------------------------------------------------------------
    # Raw slot access
    # -------------------------------------------------------------------------

    def read_raw(self) -> Optional[str]:
        """Stored JSON text, or None if the slot is empty."""
        conn = self._get_connection()
        try:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (self.key,)
            ).fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def write_raw(self, value: str) -> bool:
        """Store JSON text in the slot. Returns False if the database is unusable."""
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    """INSERT INTO kv_store (key, value) VALUES (?, ?)
                       ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                    (self.key, value)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Could not save progress to {self.db_path}: {e}")
            return False
        return True

    # -------------------------------------------------------------------------
    # Done flags
    # -------------------------------------------------------------------------

    def load(self) -> list[bool]:
        """
        Load the done flags.

        Returns:
            60 booleans; all False if the slot is empty, malformed, or the
            stored array has the wrong length
        """
        try:
            raw = self.read_raw()
        except sqlite3.Error as e:
            logger.warning(f"Could not read progress from {self.db_path}: {e}")
            return default_done()

        if raw is None:
            return default_done()

        try:
            snapshot = ProgressSnapshot.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Discarding unreadable progress snapshot: {e.__class__.__name__}")
            return default_done()
        return list(snapshot.done)

    def save(self, done: list[bool]) -> bool:
        """
        Persist the full done array.

        Returns:
            False if the database could not be written (logged, not raised)

        Raises:
            ValueError: If done does not hold exactly 60 entries
        """
        if len(done) != TOTAL_DIVISIONS:
            raise ValueError(f"Expected {TOTAL_DIVISIONS} flags, got {len(done)}")
        snapshot = ProgressSnapshot(done=[bool(d) for d in done])
        return self.write_raw(snapshot.model_dump_json())

    def reset(self):
        """Delete the stored progress."""
        try:
            conn = self._get_connection()
            try:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (self.key,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Could not reset progress in {self.db_path}: {e}")
