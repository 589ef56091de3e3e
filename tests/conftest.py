"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from expense_tracker.core.models import Expense
from expense_tracker.export.datastore import ExpenseStore, HistoryStore, MemoryStore
from expense_tracker.export.engine import ExportEngine
from expense_tracker.export.history import ExportHistory
from tests.fixtures.synthetic_data import make_expense, synthetic_expenses


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def scenario_expenses() -> list[Expense]:
    """The two-expense scenario: one quoted description, one plain."""
    return [
        make_expense("2024-01-05", "Food", 12.50, "Lunch", expense_id="exp-1"),
        make_expense("2024-02-10", "Bills", 100, "Electric, bill", expense_id="exp-2"),
    ]


@pytest.fixture
def sample_expenses() -> list[Expense]:
    """Deterministic synthetic expenses spanning several months and all categories."""
    return synthetic_expenses(count=40, seed=7)


@pytest.fixture
def memory_backend() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def history(memory_backend) -> ExportHistory:
    return ExportHistory(HistoryStore(memory_backend))


@pytest.fixture
def engine(history) -> ExportEngine:
    return ExportEngine(history=history)


@pytest.fixture
def expense_store(memory_backend) -> ExpenseStore:
    return ExpenseStore(memory_backend)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests never touch real data
    monkeypatch.setenv("EXPENSES_ENV", "test")
    monkeypatch.setenv("EXPENSES_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("EXPENSES_OUTPUT_DIR", str(tmp_path / "exports"))
    monkeypatch.setenv("EXPORT_DELAY_MS", "0")

    from expense_tracker.core import config

    monkeypatch.setattr(config, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "export: Tests for export generation and orchestration")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
