"""
Tests for ShipmentEngine through the InventoryLedger facade.

Invariants tested:
- ATOMIC_SHIPMENT: any shipment with a missing, Abnormal or depleted
  component changes no record, appends no ShipmentRecord and journals
  nothing.
- A successful shipment decrements exactly five records by exactly 1 and
  appends exactly one ShipmentRecord.
"""

from datetime import datetime

import pytest

from tests.factories import SHIP_DATE, make_record, quantities, ship_command
from warehouse_kernel.domain.catalog import (
    BOTTOM_SHELL,
    INTERFACE_BOARD,
    LIGHT_BOARD,
    MAIN_BOARD,
    TOP_SHELL,
)
from warehouse_kernel.domain.commands import AddMaterialCommand
from warehouse_kernel.domain.material import MaterialStatus
from warehouse_kernel.domain.shipment import MovementType
from warehouse_kernel.exceptions import (
    DuplicateSerialNumberError,
    InsufficientOrAbnormalStockError,
    InsufficientStockError,
    StockError,
    ValidationError,
)
from warehouse_kernel.services.inventory_ledger import InventoryLedger


def _assert_untouched(ledger, before_records, before_movements=0):
    assert ledger.list_materials() == before_records
    assert ledger.list_shipments() == ()
    assert len(ledger.list_movements()) == before_movements


# =========================================================================
# Success path
# =========================================================================


class TestShipProductSuccess:

    def test_scenario_m001_ships(self, ledger):
        """M001 (qty 1) and four components on hand: one shipment, M001 goes to 0."""
        shipment = ledger.ship_product(ship_command())

        m001 = ledger.get_material("M001")
        assert m001.quantity == 0
        assert m001.status is MaterialStatus.WARNING
        assert len(ledger.list_shipments()) == 1
        assert shipment.sequence == 1
        assert shipment.main_board_material_id == "M001"

    def test_exactly_five_records_decremented(self, ledger):
        before = quantities(ledger)
        ledger.ship_product(ship_command())
        after = quantities(ledger)
        changed = {mid for mid in before if before[mid] != after[mid]}
        assert changed == {"M001", "M002", "M003", "M004", "M005"}
        assert all(before[mid] - after[mid] == 1 for mid in changed)

    def test_shells_rederived(self, ledger):
        ledger.ship_product(ship_command())
        assert ledger.get_material("M004").quantity == 14
        assert ledger.get_material("M004").status is MaterialStatus.NORMAL

    def test_record_contents(self, ledger):
        shipment = ledger.ship_product(ship_command(remark=" rush order "))
        assert shipment.serial_number == "SN0001"
        assert shipment.product_name == "FUC Calibrator Body"
        assert shipment.part_number == "HXF-FFV-RS-VRF"
        assert shipment.shipment_date == SHIP_DATE
        assert shipment.operator == "li.wei"
        assert shipment.remark == "rush order"
        assert [(c.role, c.material_id) for c in shipment.consumed_components] == [
            ("main_board", "M001"),
            ("interface_board", "M002"),
            ("light_board", "M003"),
            ("top_shell", "M004"),
            ("bottom_shell", "M005"),
        ]

    def test_explicit_product_metadata(self, ledger):
        shipment = ledger.ship_product(
            ship_command(product_name="FUC Calibrator Body v2", part_number="HXF-2")
        )
        assert shipment.product_name == "FUC Calibrator Body v2"
        assert shipment.part_number == "HXF-2"

    def test_datetime_date_truncated(self, ledger):
        shipment = ledger.ship_product(
            ship_command(shipment_date=datetime(2024, 2, 21, 16, 45))
        )
        assert shipment.shipment_date == SHIP_DATE

    def test_one_shipment_movement_per_component(self, ledger):
        ledger.ship_product(ship_command())
        movements = [
            m for m in ledger.list_movements() if m.movement_type is MovementType.SHIPMENT
        ]
        assert len(movements) == 5
        assert {m.reference for m in movements} == {"SN0001"}
        assert all(m.quantity_delta == -1 for m in movements)

    def test_operator_picks_main_board(self, ledger):
        """The caller's main board is used even when an earlier one is eligible."""
        ledger.add_material(AddMaterialCommand(name=MAIN_BOARD, material_id="M006"))
        shipment = ledger.ship_product(ship_command(main_board="M006"))
        assert shipment.main_board_material_id == "M006"
        assert ledger.get_material("M001").quantity == 1
        assert ledger.get_material("M006").quantity == 0

    def test_skips_depleted_boards(self, ledger):
        """After the first shipment the next board set is resolved, not the spent one."""
        ledger.ship_product(ship_command())
        for name, mid in ((MAIN_BOARD, "M006"), (INTERFACE_BOARD, "M007"), (LIGHT_BOARD, "M008")):
            ledger.add_material(AddMaterialCommand(name=name, material_id=mid))

        shipment = ledger.ship_product(ship_command("SN0002", "M006"))
        assert shipment.consumed_material_ids == ("M006", "M007", "M008", "M004", "M005")
        assert shipment.sequence == 2

    def test_skips_pinned_records(self, ledger):
        ledger.add_material(AddMaterialCommand(name=INTERFACE_BOARD, material_id="M007"))
        ledger.mark_abnormal("M002", "bent pins")
        shipment = ledger.ship_product(ship_command())
        assert "M007" in shipment.consumed_material_ids
        assert ledger.get_material("M002").quantity == 1

    def test_logs_shipment_committed(self, ledger, captured_logs):
        ledger.ship_product(ship_command())
        committed = next(r for r in captured_logs() if r["message"] == "shipment_committed")
        assert committed["serial_number"] == "SN0001"
        assert committed["command"] == "ship_product"
        assert committed["consumed_material_ids"] == ["M001", "M002", "M003", "M004", "M005"]


# =========================================================================
# Failure path: nothing changes
# =========================================================================


class TestShipProductAtomicity:

    def test_scenario_m001_empty(self, deterministic_clock):
        seed = [
            make_record("M001", MAIN_BOARD, 0, status=MaterialStatus.WARNING),
            make_record("M002", INTERFACE_BOARD, 1),
            make_record("M003", LIGHT_BOARD, 1),
            make_record("M004", TOP_SHELL, 15),
            make_record("M005", BOTTOM_SHELL, 15),
        ]
        ledger = InventoryLedger(seed, clock=deterministic_clock)
        before = ledger.list_materials()

        with pytest.raises(StockError) as exc_info:
            ledger.ship_product(ship_command())
        assert isinstance(exc_info.value, InsufficientStockError)
        assert exc_info.value.material_id == "M001"
        _assert_untouched(ledger, before)

    def test_last_component_depleted(self, ledger):
        """The bottom shell is checked last; earlier components stay intact."""
        ledger.issue_stock("M005", 15)
        before = ledger.list_materials()
        movements = len(ledger.list_movements())

        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.ship_product(ship_command())
        assert exc_info.value.material_name == BOTTOM_SHELL
        _assert_untouched(ledger, before, movements)

    def test_component_missing(self, ledger):
        ledger.delete_material("M003")
        before = ledger.list_materials()
        movements = len(ledger.list_movements())

        with pytest.raises(InsufficientOrAbnormalStockError) as exc_info:
            ledger.ship_product(ship_command())
        assert exc_info.value.unavailable_roles == ("light_board",)
        assert exc_info.value.material_names == (LIGHT_BOARD,)
        _assert_untouched(ledger, before, movements)

    def test_component_abnormal(self, ledger):
        ledger.mark_abnormal("M004", "warped")
        before = ledger.list_materials()
        movements = len(ledger.list_movements())

        with pytest.raises(InsufficientOrAbnormalStockError) as exc_info:
            ledger.ship_product(ship_command())
        assert exc_info.value.unavailable_roles == ("top_shell",)
        _assert_untouched(ledger, before, movements)

    def test_all_unavailable_roles_reported(self, ledger):
        ledger.mark_abnormal("M001", "burnt")
        ledger.delete_material("M005")
        with pytest.raises(InsufficientOrAbnormalStockError) as exc_info:
            ledger.ship_product(ship_command())
        assert exc_info.value.unavailable_roles == ("main_board", "bottom_shell")
        assert exc_info.value.code == "INSUFFICIENT_OR_ABNORMAL_STOCK"

    def test_unknown_main_board(self, ledger):
        before = ledger.list_materials()
        with pytest.raises(ValidationError) as exc_info:
            ledger.ship_product(ship_command(main_board="M999"))
        assert exc_info.value.field == "main_board_material_id"
        _assert_untouched(ledger, before)

    def test_main_board_of_wrong_kind(self, ledger):
        with pytest.raises(ValidationError, match="not a FUC Main Board"):
            ledger.ship_product(ship_command(main_board="M004"))

    @pytest.mark.parametrize(
        "overrides",
        [
            {"serial_number": ""},
            {"serial_number": None},
            {"operator": "  "},
            {"main_board_material_id": ""},
            {"shipment_date": "2024-02-21"},
            {"remark": 12},
        ],
    )
    def test_malformed_input(self, ledger, overrides):
        before = ledger.list_materials()
        with pytest.raises(ValidationError):
            ledger.ship_product(ship_command(**overrides))
        _assert_untouched(ledger, before)

    def test_duplicate_serial_number(self, ledger):
        ledger.ship_product(ship_command())
        for name, mid in ((MAIN_BOARD, "M006"), (INTERFACE_BOARD, "M007"), (LIGHT_BOARD, "M008")):
            ledger.add_material(AddMaterialCommand(name=name, material_id=mid))
        before = ledger.list_materials()

        with pytest.raises(DuplicateSerialNumberError) as exc_info:
            ledger.ship_product(ship_command("SN0001", "M006"))
        assert exc_info.value.serial_number == "SN0001"
        assert ledger.list_materials() == before
        assert len(ledger.list_shipments()) == 1

    def test_rejection_logged(self, ledger, captured_logs):
        ledger.mark_abnormal("M004", "warped")
        with pytest.raises(InsufficientOrAbnormalStockError):
            ledger.ship_product(ship_command())
        rejected = next(r for r in captured_logs() if r["message"] == "command_rejected")
        assert rejected["level"] == "WARNING"
        assert rejected["error_code"] == "INSUFFICIENT_OR_ABNORMAL_STOCK"
        assert rejected["command"] == "ship_product"
        assert rejected["serial_number"] == "SN0001"
