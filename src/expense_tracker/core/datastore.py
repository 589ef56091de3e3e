#!/usr/bin/env python3
"""
DataStore Protocols - Standard interfaces for persisted expense tracker state.

Every persisted collection lives under a string key in a synchronous JSON store.
Two protocols model that here:

- KeyValueStore: raw `load(key)` / `save(key, value)` access to JSON documents
- DataStore: one typed logical collection (expenses, export history, schedules,
  integration flags) layered over a KeyValueStore
"""

from datetime import datetime
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class KeyValueStore(Protocol):
    """
    Protocol for a synchronous string-keyed JSON document store.

    Implementations return None from load() when the key is absent, and raise
    StorageReadError when a document exists but cannot be decoded.
    """

    def load(self, key: str) -> Any | None:
        """Load the JSON document stored under key, or None if absent."""
        ...

    def save(self, key: str, value: Any) -> None:
        """
        Persist a JSON-serializable document under key.

        Raises:
            StorageWriteError: If the document cannot be written
        """
        ...

    def last_modified(self, key: str) -> datetime | None:
        """Get the modification time of key, or None if absent."""
        ...


class DataStore(Protocol[T]):
    """
    Protocol for one logical persisted collection.

    Type parameter T is the collection's domain type (list of expenses, list of
    history entries, mapping of integration flags).
    """

    def exists(self) -> bool:
        """Check whether the collection has ever been saved."""
        ...

    def load(self) -> T:
        """
        Load the collection.

        Absent or corrupt data degrades to the empty collection.
        """
        ...

    def save(self, data: T) -> None:
        """
        Persist the whole collection.

        Raises:
            StorageWriteError: If the collection cannot be written
        """
        ...

    def last_modified(self) -> datetime | None:
        """Timestamp of the most recent save, or None if never saved."""
        ...

    def item_count(self) -> int | None:
        """Number of items stored, or None if never saved."""
        ...

    def summary_text(self) -> str:
        """Human-readable one-line summary for CLI display and logs."""
        ...
