"""
Persistence for the S corp tax wizard.

The wizard keeps one JSON snapshot of its state in a key/value store,
backed by SQLite or by memory.
"""

from .wizard_persistence import (
    KeyValueStore,
    InMemoryKeyValueStore,
    SQLiteKeyValueStore,
    WizardStatePersistence,
    MalformedPersistedState,
    get_wizard_persistence,
)

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "WizardStatePersistence",
    "MalformedPersistedState",
    "get_wizard_persistence",
]
