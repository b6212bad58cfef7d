"""
MovementJournal -- append-only history of stock movements.

Responsibility:
    Records every change to a stock record: creation, receipts, issues,
    shipment consumption, status pins and deletion.

Architecture position:
    Kernel > Services -- stateful, in-memory, append-only.

Invariants enforced:
    APPEND_ONLY_LEDGER -- no update or delete; sequences strictly increase
    from 1.

Audit relevance:
    Deleting a material removes it from the store immediately.  The
    ``delete`` movement written here is what remains of it.
"""

from datetime import date

from warehouse_kernel.domain.material import MaterialRecord
from warehouse_kernel.domain.shipment import MovementType, StockMovement
from warehouse_kernel.logging_config import get_logger

logger = get_logger("services.movement_journal")


class MovementJournal:
    """Append-only list of ``StockMovement`` entries."""

    def __init__(self):
        self._movements: list[StockMovement] = []

    def record(
        self,
        record: MaterialRecord,
        movement_type: MovementType,
        quantity_delta: int,
        occurred_on: date,
        reference: str | None = None,
    ) -> StockMovement:
        """
        Append a movement for ``record``.

        ``record`` is the state after the movement (the removed record for
        deletions), so ``quantity_after`` is read from it; for a delete it
        is 0.
        """
        quantity_after = 0 if movement_type is MovementType.DELETE else record.quantity
        movement = StockMovement(
            sequence=len(self._movements) + 1,
            material_id=record.material_id,
            material_name=record.name,
            movement_type=movement_type,
            quantity_delta=quantity_delta,
            quantity_after=quantity_after,
            occurred_on=occurred_on,
            reference=reference,
        )
        self._movements.append(movement)
        logger.debug(
            "stock_movement_recorded",
            extra={
                "sequence": movement.sequence,
                "material_id": movement.material_id,
                "movement_type": movement.movement_type,
                "quantity_delta": movement.quantity_delta,
                "quantity_after": movement.quantity_after,
            },
        )
        return movement

    def list(self) -> tuple[StockMovement, ...]:
        return tuple(self._movements)

    def for_material(self, material_id: str) -> tuple[StockMovement, ...]:
        return tuple(m for m in self._movements if m.material_id == material_id)

    def __len__(self) -> int:
        return len(self._movements)
