"""
Pytest fixtures for the warehouse ledger test suite.

Provides:
- Structured logging configuration and log capture
- A deterministic clock
- The standard seed stock (M001-M005) and a ledger built on it

Builders shared by test modules live in ``tests/factories.py``.
"""

import json
import logging
from io import StringIO

import pytest

from tests.factories import standard_seed
from warehouse_kernel.domain.clock import DeterministicClock
from warehouse_kernel.domain.material import MaterialRecord
from warehouse_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from warehouse_kernel.services.inventory_ledger import InventoryLedger


# =============================================================================
# Pytest hooks
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow_locks: mark test as exercising the ledger lock under contention"
    )


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture warehouse_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, ledger):
            ledger.issue_stock("M004", 1)
            logs = captured_logs()
            assert any(r["message"] == "stock_issued" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("warehouse_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Clock fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    """Clock fixed at 2024-02-20 09:00 UTC."""
    return DeterministicClock()


# =============================================================================
# Ledger fixtures
# =============================================================================


@pytest.fixture
def seed_records() -> list[MaterialRecord]:
    return standard_seed()


@pytest.fixture
def ledger(seed_records, deterministic_clock) -> InventoryLedger:
    """InventoryLedger seeded with M001-M005."""
    return InventoryLedger(seed_records, clock=deterministic_clock)


@pytest.fixture
def empty_ledger(deterministic_clock) -> InventoryLedger:
    return InventoryLedger(clock=deterministic_clock)
