"""
Tests for ShipmentLedger and MovementJournal, the two append-only histories.

Invariants tested:
- APPEND_ONLY_LEDGER: sequences start at 1 and only the next one is accepted;
  a shipment id is never recorded twice.
"""

from uuid import uuid4

import pytest

from tests.factories import SHIP_DATE, make_record
from warehouse_kernel.domain.shipment import (
    ConsumedComponent,
    MovementType,
    ShipmentRecord,
)
from warehouse_kernel.exceptions import LedgerError, ShipmentLedgerError
from warehouse_kernel.services.movement_journal import MovementJournal
from warehouse_kernel.services.shipment_ledger import ShipmentLedger


def _shipment(sequence: int, serial_number: str = "SN0001", shipment_id=None) -> ShipmentRecord:
    return ShipmentRecord(
        shipment_id=shipment_id or uuid4(),
        sequence=sequence,
        serial_number=serial_number,
        product_name="FUC Calibrator Body",
        part_number="HXF-FFV-RS-VRF",
        main_board_material_id="M001",
        shipment_date=SHIP_DATE,
        operator="li.wei",
        consumed_components=(ConsumedComponent("main_board", "M001", "FUC Main Board"),),
    )


class TestShipmentLedger:

    def test_append_in_sequence(self):
        ledger = ShipmentLedger()
        assert ledger.next_sequence() == 1
        ledger.append(_shipment(1))
        ledger.append(_shipment(2, "SN0002"))
        assert [s.sequence for s in ledger.list()] == [1, 2]
        assert len(ledger) == 2

    def test_out_of_order_sequence(self):
        ledger = ShipmentLedger()
        with pytest.raises(ShipmentLedgerError, match="expected sequence 1"):
            ledger.append(_shipment(2))
        assert len(ledger) == 0

    def test_reused_shipment_id(self):
        ledger = ShipmentLedger()
        sid = uuid4()
        ledger.append(_shipment(1, shipment_id=sid))
        with pytest.raises(ShipmentLedgerError) as exc_info:
            ledger.append(_shipment(2, "SN0002", shipment_id=sid))
        assert exc_info.value.code == "SHIPMENT_LEDGER_VIOLATION"
        assert isinstance(exc_info.value, LedgerError)

    def test_find_by_serial_number(self):
        ledger = ShipmentLedger()
        shipment = ledger.append(_shipment(1, "SN0042"))
        assert ledger.find_by_serial_number("SN0042") is shipment
        assert ledger.find_by_serial_number("SN0043") is None

    def test_list_is_snapshot(self):
        ledger = ShipmentLedger()
        snapshot = ledger.list()
        ledger.append(_shipment(1))
        assert snapshot == ()

    def test_no_mutators(self):
        ledger = ShipmentLedger()
        assert not hasattr(ledger, "remove")
        assert not hasattr(ledger, "update")
        assert not hasattr(ledger, "delete")


class TestMovementJournal:

    def test_sequence_and_quantity_after(self):
        journal = MovementJournal()
        first = journal.record(make_record("M004", quantity=15), MovementType.ADD, 15, SHIP_DATE)
        second = journal.record(
            make_record("M004", quantity=12), MovementType.ISSUE, -3, SHIP_DATE
        )
        assert (first.sequence, second.sequence) == (1, 2)
        assert second.quantity_after == 12
        assert second.quantity_delta == -3

    def test_delete_has_zero_after(self):
        journal = MovementJournal()
        movement = journal.record(
            make_record("M004", quantity=15), MovementType.DELETE, -15, SHIP_DATE
        )
        assert movement.quantity_after == 0

    def test_for_material(self):
        journal = MovementJournal()
        journal.record(make_record("M004"), MovementType.ADD, 15, SHIP_DATE)
        journal.record(make_record("M005"), MovementType.ADD, 15, SHIP_DATE)
        journal.record(make_record("M004", quantity=14), MovementType.ISSUE, -1, SHIP_DATE)
        assert [m.sequence for m in journal.for_material("M004")] == [1, 3]
        assert len(journal) == 3
