#!/usr/bin/env python3
"""
DataStore Mixin - Common functionality for all collection DataStore implementations.

Provides the degrade-to-empty read policy, metadata methods, and the serialized
read-modify-write cycle shared by every persisted collection.
"""

import logging
import threading
from abc import abstractmethod
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Generic, TypeVar

from .datastore import KeyValueStore
from .errors import ExpenseTrackerError, StorageReadError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_registry_lock = threading.Lock()
_collection_locks: dict[tuple[int, str], threading.RLock] = {}


def collection_lock(backend: KeyValueStore, key: str) -> threading.RLock:
    """
    Get the lock guarding one collection of one backend.

    Locks are shared between store instances that wrap the same backend, so two
    stores over the same key never interleave their read-modify-write cycles.
    """
    with _registry_lock:
        lock_key = (id(backend), key)
        if lock_key not in _collection_locks:
            _collection_locks[lock_key] = threading.RLock()
        return _collection_locks[lock_key]


class DataStoreMixin(Generic[T]):
    """
    Mixin providing common DataStore functionality.

    Subclasses must implement:
    - empty() -> T
    - decode(raw) -> T
    - encode(data) -> JSON-serializable value
    - summary_text() -> str
    """

    raw_type: type = list

    def __init__(self, backend: KeyValueStore, key: str):
        """Initialize mixin state."""
        self.backend = backend
        self.key = key
        self.lock = collection_lock(backend, key)

    @abstractmethod
    def empty(self) -> T:
        """Return a fresh empty collection."""
        ...

    @abstractmethod
    def decode(self, raw: Any) -> T:
        """Convert the raw JSON document to the domain collection."""
        ...

    @abstractmethod
    def encode(self, data: T) -> Any:
        """Convert the domain collection to a JSON document."""
        ...

    @abstractmethod
    def summary_text(self) -> str:
        """Get human-readable summary of current data state."""
        ...

    def load_strict(self) -> T:
        """
        Load the collection, surfacing every failure.

        Raises:
            StorageReadError: If the document is absent, corrupt or mis-shaped
        """
        raw = self.backend.load(self.key)
        if raw is None:
            raise StorageReadError(f"No data stored under {self.key!r}")
        if not isinstance(raw, self.raw_type):
            raise StorageReadError(
                f"Invalid data under {self.key!r}: expected {self.raw_type.__name__}, got {type(raw).__name__}"
            )
        try:
            return self.decode(raw)
        except (KeyError, TypeError, ValueError, ExpenseTrackerError) as e:
            raise StorageReadError(f"Invalid record under {self.key!r}: {e}") from e

    def load(self) -> T:
        """Load the collection; absent or corrupt data degrades to empty."""
        try:
            return self.load_strict()
        except StorageReadError as e:
            if self.exists():
                logger.warning("Discarding unreadable %s: %s", self.key, e)
            return self.empty()

    def save(self, data: T) -> None:
        """Persist the whole collection."""
        with self.lock:
            self.backend.save(self.key, self.encode(data))

    @contextmanager
    def editing(self) -> Iterator[T]:
        """
        Serialized read-modify-write cycle.

        The yielded collection is saved when the block exits without error.
        """
        with self.lock:
            data = self.load()
            yield data
            self.save(data)

    def update(self, mutate: Callable[[T], T]) -> T:
        """Replace the collection with mutate(current) under the collection lock."""
        with self.lock:
            data = mutate(self.load())
            self.save(data)
            return data

    def exists(self) -> bool:
        """Check whether the collection has ever been saved."""
        return self.last_modified() is not None

    def last_modified(self) -> datetime | None:
        """Get timestamp of most recent save."""
        return self.backend.last_modified(self.key)

    def age_days(self) -> int | None:
        """
        Get age of data in days since last modification.

        Returns:
            Number of days since last modification, or None if data doesn't exist
        """
        last_mod = self.last_modified()
        if last_mod is None:
            return None
        return (datetime.now() - last_mod).days

    def item_count(self) -> int | None:
        """Get count of items in the stored collection."""
        if not self.exists():
            return None
        return len(self.load())  # type: ignore[arg-type]
