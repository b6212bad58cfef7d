"""
Concurrency tests for the InventoryLedger command lock.

Many threads issue and ship against one ledger at once.  The lock must make
every outcome equal to some serial order: no lost update, no quantity below
zero, no component consumed by a shipment that was rejected.

Run with: pytest tests/concurrency/test_ledger_race_safety.py -v
Skip with: pytest -m "not slow_locks"
"""

from concurrent.futures import ThreadPoolExecutor
from threading import Barrier

import pytest

from tests.factories import make_record, ship_command, standard_seed
from warehouse_kernel.domain.catalog import INTERFACE_BOARD, LIGHT_BOARD, MAIN_BOARD
from warehouse_kernel.domain.commands import AddMaterialCommand
from warehouse_kernel.exceptions import StockError
from warehouse_kernel.services.inventory_ledger import InventoryLedger

pytestmark = pytest.mark.slow_locks

WORKERS = 16


class TestIssueRaces:

    def test_concurrent_issues_never_oversell(self, deterministic_clock):
        ledger = InventoryLedger([make_record("M004", quantity=50)], clock=deterministic_clock)
        barrier = Barrier(WORKERS)

        def issue(_):
            barrier.wait()
            successes = 0
            for _ in range(5):
                try:
                    ledger.issue_stock("M004", 1)
                    successes += 1
                except StockError:
                    pass
            return successes

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            total = sum(pool.map(issue, range(WORKERS)))

        assert total == 50
        assert ledger.get_material("M004").quantity == 0
        assert len(ledger.list_movements("M004")) == 50


class TestShipmentRaces:

    def test_one_board_one_shipment(self, deterministic_clock):
        """Every thread targets M001; exactly one shipment wins."""
        ledger = InventoryLedger(standard_seed(), clock=deterministic_clock)
        for i in range(WORKERS):
            ledger.add_material(AddMaterialCommand(name=INTERFACE_BOARD, material_id=f"IB{i}"))
            ledger.add_material(AddMaterialCommand(name=LIGHT_BOARD, material_id=f"LB{i}"))
        barrier = Barrier(WORKERS)

        def ship(i):
            barrier.wait()
            try:
                ledger.ship_product(ship_command(f"SN{i:04d}", "M001"))
                return True
            except StockError:
                return False

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            results = list(pool.map(ship, range(WORKERS)))

        assert results.count(True) == 1
        assert len(ledger.list_shipments()) == 1
        assert ledger.get_material("M004").quantity == 14
        assert ledger.get_material("M005").quantity == 14

    def test_parallel_shipments_consume_exactly_once(self, deterministic_clock):
        """Each thread has its own main board; shells run out after 15."""
        ledger = InventoryLedger(standard_seed(), clock=deterministic_clock)
        count = 20
        for i in range(count):
            ledger.add_material(AddMaterialCommand(name=MAIN_BOARD, material_id=f"MB{i}"))
            ledger.add_material(AddMaterialCommand(name=INTERFACE_BOARD, material_id=f"IB{i}"))
            ledger.add_material(AddMaterialCommand(name=LIGHT_BOARD, material_id=f"LB{i}"))
        barrier = Barrier(count)

        def ship(i):
            barrier.wait()
            try:
                ledger.ship_product(ship_command(f"SN{i:04d}", f"MB{i}"))
                return True
            except StockError:
                return False

        with ThreadPoolExecutor(max_workers=count) as pool:
            results = list(pool.map(ship, range(count)))

        shipped = results.count(True)
        assert shipped == 15
        assert len(ledger.list_shipments()) == 15
        assert ledger.get_material("M004").quantity == 0
        assert ledger.get_material("M005").quantity == 0
        assert all(r.quantity >= 0 for r in ledger.list_materials())
        assert [s.sequence for s in ledger.list_shipments()] == list(range(1, 16))

        consumed = [mid for s in ledger.list_shipments() for mid in s.consumed_material_ids]
        assert len(consumed) == len(set(consumed)) + 2 * 14
