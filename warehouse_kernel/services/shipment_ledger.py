"""
ShipmentLedger -- append-only history of completed shipments.

Responsibility:
    Holds one ``ShipmentRecord`` per successful ShipProduct command, in
    commit order.  Read by reporting and the spreadsheet export.

Architecture position:
    Kernel > Services -- stateful, in-memory, append-only.  Written only
    by ``ShipmentEngine``.

Invariants enforced:
    APPEND_ONLY_LEDGER -- there is no update or delete.  ``append()``
    accepts only the next sequence number and a shipment id not seen
    before.

Failure modes:
    - ShipmentLedgerError: reused shipment id or out-of-order sequence.
"""

from uuid import UUID

from warehouse_kernel.domain.shipment import ShipmentRecord
from warehouse_kernel.exceptions import ShipmentLedgerError
from warehouse_kernel.logging_config import get_logger

logger = get_logger("services.shipment_ledger")


class ShipmentLedger:
    """Append-only sequence of ``ShipmentRecord``."""

    def __init__(self):
        self._records: list[ShipmentRecord] = []
        self._ids: set[UUID] = set()
        self._by_serial: dict[str, ShipmentRecord] = {}

    def next_sequence(self) -> int:
        return len(self._records) + 1

    def append(self, record: ShipmentRecord) -> ShipmentRecord:
        if record.shipment_id in self._ids:
            raise ShipmentLedgerError(str(record.shipment_id), "shipment id already recorded")
        if record.sequence != self.next_sequence():
            raise ShipmentLedgerError(
                str(record.shipment_id),
                f"expected sequence {self.next_sequence()}, got {record.sequence}",
            )
        self._records.append(record)
        self._ids.add(record.shipment_id)
        self._by_serial[record.serial_number] = record
        logger.info(
            "shipment_recorded",
            extra={
                "shipment_id": record.shipment_id,
                "sequence": record.sequence,
                "serial_number": record.serial_number,
            },
        )
        return record

    def find_by_serial_number(self, serial_number: str) -> ShipmentRecord | None:
        return self._by_serial.get(serial_number)

    def list(self) -> tuple[ShipmentRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)
