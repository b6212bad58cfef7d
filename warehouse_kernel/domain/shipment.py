"""
Shipment and movement records.

Responsibility:
    Immutable entries of the two append-only histories: finished-goods
    shipments and stock movements.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.

Invariants enforced:
    APPEND_ONLY_LEDGER -- both types are frozen; the ledgers that hold them
    expose no update or delete.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID


@dataclass(frozen=True)
class ConsumedComponent:
    """One BOM role and the material record that filled it."""
    role: str
    material_id: str
    material_name: str


@dataclass(frozen=True)
class ShipmentRecord:
    """
    A completed finished-goods shipment.

    ``main_board_material_id`` is the operator's choice, stored verbatim.
    ``consumed_components`` lists every record decremented by the shipment,
    in BOM order, so each consumed unit is traceable.
    """
    shipment_id: UUID
    sequence: int
    serial_number: str
    product_name: str
    part_number: str
    main_board_material_id: str
    shipment_date: date
    operator: str
    consumed_components: tuple[ConsumedComponent, ...]
    remark: str | None = None

    @property
    def consumed_material_ids(self) -> tuple[str, ...]:
        return tuple(c.material_id for c in self.consumed_components)


class MovementType(str, Enum):
    """Enumeration of stock movement categories."""
    ADD = "add"
    RECEIVE = "receive"
    ISSUE = "issue"
    SHIPMENT = "shipment"
    MARK_ABNORMAL = "mark_abnormal"
    CLEAR_ABNORMAL = "clear_abnormal"
    DELETE = "delete"


@dataclass(frozen=True)
class StockMovement:
    """
    One journaled change to a stock record.

    ``quantity_delta`` is signed (negative for outbound); status changes
    have a delta of 0.  ``reference`` holds the shipment SN or the abnormal
    reason where relevant.
    """
    sequence: int
    material_id: str
    material_name: str
    movement_type: MovementType
    quantity_delta: int
    quantity_after: int
    occurred_on: date
    reference: str | None = None
