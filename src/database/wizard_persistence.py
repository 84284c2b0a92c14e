"""
Wizard State Persistence Layer.

Keeps a snapshot of the tax wizard state under a single key in a key/value
store so progress survives a restart. The snapshot is the full
TaxDataState serialized as JSON.

Persistence is best-effort: load falls back to the default state when the
snapshot is missing or unreadable, and save/clear failures are logged and
swallowed. None of these operations retry.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError

from models.tax_data import TaxDataState

logger = logging.getLogger(__name__)


DEFAULT_DB_PATH = Path(__file__).parent.parent.parent / "data" / "wizard_state.db"
DEFAULT_STORAGE_KEY = "taxData"


class MalformedPersistedState(Exception):
    """A stored snapshot exists but cannot be decoded into a TaxDataState."""


def encode_state(state: TaxDataState) -> str:
    """Serialize state to its JSON snapshot."""
    return state.model_dump_json()


def decode_state(raw: str) -> TaxDataState:
    """
    Parse a JSON snapshot.

    Raises:
        MalformedPersistedState: If the text is not valid JSON or does not
            describe a TaxDataState.
    """
    try:
        return TaxDataState.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedPersistedState(str(e)) from e


class KeyValueStore(ABC):
    """Abstract base class for snapshot storage backends."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, overwriting any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove key. Returns True if something was deleted."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """
    In-memory storage.

    Useful for tests and sessions that do not need to survive a restart.
    """

    def __init__(self):
        self._values: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> bool:
        return self._values.pop(key, None) is not None


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite-backed key/value storage."""

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize storage.

        Args:
            db_path: Path to SQLite database file.
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self._ensure_tables_exist()

    def _ensure_tables_exist(self):
        """Create tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS wizard_snapshots (
                    storage_key TEXT PRIMARY KEY,
                    value JSON NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    def get(self, key: str) -> Optional[str]:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT value FROM wizard_snapshots WHERE storage_key = ?",
                (key,)
            )
            row = cursor.fetchone()
            return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        now = datetime.utcnow().isoformat()

        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                INSERT INTO wizard_snapshots (storage_key, value, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(storage_key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
            """, (key, value, now, now))
            conn.commit()

    def delete(self, key: str) -> bool:
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM wizard_snapshots WHERE storage_key = ?",
                (key,)
            )
            conn.commit()
            return cursor.rowcount > 0


class WizardStatePersistence:
    """
    Snapshot persistence for the tax wizard.

    Wraps a KeyValueStore and a single storage key. Every method degrades
    to "use the default state" or "do nothing" instead of raising.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_STORAGE_KEY):
        self._store = store
        self.key = key

    def load(self) -> TaxDataState:
        """
        Load the saved state.

        Returns:
            The persisted TaxDataState, or a fresh default state if there
            is no snapshot or it cannot be read.
        """
        try:
            raw = self._store.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read wizard state '{self.key}': {e}")
            return TaxDataState()

        if raw is None:
            return TaxDataState()

        try:
            state = decode_state(raw)
        except MalformedPersistedState as e:
            logger.warning(f"Discarding malformed wizard state '{self.key}': {e}")
            return TaxDataState()

        logger.info(
            f"Restored wizard state '{self.key}' at step {state.current_step} "
            f"(completed={state.completed_steps})"
        )
        return state

    def save(self, state: TaxDataState) -> None:
        """Overwrite the snapshot with state."""
        try:
            self._store.set(self.key, encode_state(state))
        except Exception as e:
            logger.error(f"Failed to save wizard state '{self.key}': {e}")

    def clear(self) -> None:
        """Remove the snapshot."""
        try:
            self._store.delete(self.key)
        except Exception as e:
            logger.error(f"Failed to clear wizard state '{self.key}': {e}")


# Global instance for convenience
_wizard_persistence: Optional[WizardStatePersistence] = None


def get_wizard_persistence() -> WizardStatePersistence:
    """Get the global wizard persistence instance."""
    global _wizard_persistence
    if _wizard_persistence is None:
        from config.settings import get_wizard_settings

        settings = get_wizard_settings()
        _wizard_persistence = WizardStatePersistence(
            SQLiteKeyValueStore(settings.sqlite_path),
            key=settings.storage_key,
        )
    return _wizard_persistence
