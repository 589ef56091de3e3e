#!/usr/bin/env python3
"""
Tests for the shared DataStore behavior.

Every collection store inherits the same read policy: absent or corrupt data
degrades to the empty collection on load(), while load_strict() surfaces the
failure as StorageReadError.
"""

import threading

import pytest

from expense_tracker.core.errors import StorageReadError, StorageWriteError
from expense_tracker.export.datastore import (
    EXPENSES_KEY,
    HISTORY_KEY,
    SCHEDULES_KEY,
    ExpenseStore,
    HistoryStore,
    IntegrationStateStore,
    JsonFileStore,
    MemoryStore,
    ScheduleStore,
)
from tests.fixtures.synthetic_data import make_expense


@pytest.mark.parametrize(
    "store_class",
    [ExpenseStore, HistoryStore, ScheduleStore, IntegrationStateStore],
    ids=["ExpenseStore", "HistoryStore", "ScheduleStore", "IntegrationStateStore"],
)
class TestDataStoreInterface:
    """Contract shared by every collection store."""

    def test_load_strict_raises_when_no_data(self, store_class):
        store = store_class(MemoryStore())

        with pytest.raises(StorageReadError):
            store.load_strict()

    def test_load_degrades_to_empty(self, store_class):
        store = store_class(MemoryStore())

        assert store.load() == store.empty()
        assert store.exists() is False
        assert store.item_count() is None
        assert store.age_days() is None

    def test_wrong_document_shape_degrades_to_empty(self, store_class):
        backend = MemoryStore({store_class(MemoryStore()).key: "not a collection"})
        store = store_class(backend)

        assert store.load() == store.empty()
        with pytest.raises(StorageReadError):
            store.load_strict()

    def test_save_then_exists(self, store_class):
        store = store_class(MemoryStore())
        store.save(store.empty())

        assert store.exists() is True
        assert store.item_count() == 0
        assert store.age_days() == 0
        assert isinstance(store.summary_text(), str)


class TestExpenseStorePersistence:
    """Expense persistence through the JSON file backend."""

    def test_round_trip_through_files(self, temp_dir, scenario_expenses):
        store = ExpenseStore(JsonFileStore(temp_dir))
        store.save(scenario_expenses)

        reloaded = ExpenseStore(JsonFileStore(temp_dir)).load()

        assert [e.id for e in reloaded] == ["exp-1", "exp-2"]
        assert reloaded[1].amount.to_cents() == 10000
        assert (temp_dir / f"{EXPENSES_KEY}.json").exists()

    def test_corrupt_json_degrades_to_empty(self, temp_dir):
        (temp_dir / f"{EXPENSES_KEY}.json").write_text("{not json", encoding="utf-8")
        store = ExpenseStore(JsonFileStore(temp_dir))

        assert store.load() == []
        with pytest.raises(StorageReadError):
            store.load_strict()

    def test_malformed_record_degrades_to_empty(self):
        backend = MemoryStore({EXPENSES_KEY: [{"id": "x", "amount": 5}]})

        assert ExpenseStore(backend).load() == []

    def test_unknown_category_degrades_to_empty(self, scenario_expenses):
        record = scenario_expenses[0].to_dict() | {"category": "Groceries"}
        store = ExpenseStore(MemoryStore({EXPENSES_KEY: [record]}))

        assert store.load() == []
        with pytest.raises(StorageReadError):
            store.load_strict()

    def test_add_prepends_and_remove_reports(self, expense_store, scenario_expenses):
        expense_store.add(scenario_expenses[0])
        expense_store.add(scenario_expenses[1])

        assert [e.id for e in expense_store.load()] == ["exp-2", "exp-1"]
        assert expense_store.remove("exp-1") is True
        assert expense_store.remove("exp-1") is False
        assert [e.id for e in expense_store.load()] == ["exp-2"]

    def test_editing_saves_on_exit(self, expense_store, scenario_expenses):
        with expense_store.editing() as expenses:
            expenses.extend(scenario_expenses)

        assert len(expense_store.load()) == 2

    def test_editing_discards_on_error(self, expense_store, scenario_expenses):
        with pytest.raises(RuntimeError):
            with expense_store.editing() as expenses:
                expenses.extend(scenario_expenses)
                raise RuntimeError("abort")

        assert expense_store.exists() is False


class TestUnknownEnumValues:
    """Records naming formats this version does not know are unreadable, not fatal."""

    def test_history_with_unknown_format_degrades_to_empty(self):
        record = {
            "id": "h1",
            "timestamp": "2024-03-01T12:00:00.000Z",
            "format": "xml",
            "destination": "Local Download",
            "recordCount": 1,
            "totalAmount": 5,
            "status": "completed",
            "filename": "expenses.xml",
        }
        store = HistoryStore(MemoryStore({HISTORY_KEY: [record]}))

        assert store.load() == []
        with pytest.raises(StorageReadError):
            store.load_strict()

    def test_schedule_with_unparseable_run_time_degrades_to_empty(self):
        record = {
            "id": "b1",
            "frequency": "daily",
            "destination": "local",
            "format": "csv",
            "enabled": True,
            "nextRun": "tomorrow at two",
            "createdAt": "2024-01-10T15:30:00",
        }
        store = ScheduleStore(MemoryStore({SCHEDULES_KEY: [record]}))

        assert store.load() == []


class TestBackends:
    """KeyValueStore backends."""

    def test_memory_store_rejects_unserializable_values(self):
        with pytest.raises(StorageWriteError):
            MemoryStore().save("key", {"value": object()})

    def test_memory_store_returns_copies(self):
        backend = MemoryStore()
        backend.save("key", [1, 2])

        loaded = backend.load("key")
        loaded.append(3)

        assert backend.load("key") == [1, 2]

    def test_file_store_write_failure_raises_storage_write_error(self, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("a file, not a directory", encoding="utf-8")
        backend = JsonFileStore(blocker / "nested")

        with pytest.raises(StorageWriteError):
            backend.save("key", [])


class TestCollectionLocking:
    """Read-modify-write cycles over one collection never interleave."""

    def test_stores_over_same_backend_share_lock(self):
        backend = MemoryStore()

        assert ExpenseStore(backend).lock is ExpenseStore(backend).lock
        assert ExpenseStore(backend).lock is not HistoryStore(backend).lock

    def test_concurrent_adds_are_not_lost(self, memory_backend):
        def add_many(worker: int) -> None:
            store = ExpenseStore(memory_backend)
            for i in range(20):
                store.add(make_expense("2024-01-01", "Food", 1, f"w{worker}", expense_id=f"{worker}-{i}"))

        threads = [threading.Thread(target=add_many, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(ExpenseStore(memory_backend).load()) == 160
