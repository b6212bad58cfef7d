"""
StockMovementService -- single-material movements and status overrides.

Responsibility:
    Validates and applies commands that touch exactly one stock record:
    add, receive, issue, delete, mark abnormal, clear abnormal.

Architecture position:
    Kernel > Services -- imperative shell over ``MaterialStore``.  Called by
    ``InventoryLedger`` under its command lock.

Invariants enforced:
    NON_NEGATIVE_QUANTITY -- an issue larger than the quantity on hand is
        rejected before the store is touched.
    UNIQUE_MATERIAL_ID    -- delegated to ``MaterialStore.insert()``.
    STATUS_PIN            -- status is re-derived through ``rederive()``,
        which keeps a manual Abnormal pin.

Failure modes:
    - ValidationError (and subclasses): malformed input, unknown kind,
      serialized quantity other than 1, wrong status for an override.
    - MaterialNotFoundError: unknown material id.
    - InsufficientStockError: issue exceeds quantity on hand.
    - DuplicateMaterialIdError: add with an existing id.

Audit relevance:
    Every successful command appends one ``StockMovement`` to the
    ``MovementJournal``.
"""

from dataclasses import replace

from warehouse_kernel.domain.catalog import DEFAULT_CATALOG, MaterialCatalog
from warehouse_kernel.domain.clock import Clock, SystemClock
from warehouse_kernel.domain.commands import AddMaterialCommand
from warehouse_kernel.domain.material import MaterialKind, MaterialRecord, MaterialStatus
from warehouse_kernel.domain.shipment import MovementType
from warehouse_kernel.domain.status import WARNING_THRESHOLD, derive_status, rederive
from warehouse_kernel.domain.validation import require_int, require_text
from warehouse_kernel.exceptions import (
    InsufficientStockError,
    InvalidStatusTransitionError,
    QuantityConstraintError,
    ValidationError,
)
from warehouse_kernel.logging_config import get_logger
from warehouse_kernel.services.material_store import MaterialStore
from warehouse_kernel.services.movement_journal import MovementJournal

logger = get_logger("services.stock_movement")


class StockMovementService:
    """
    Applies single-record stock movements.

    Contract:
        Each public method validates its whole input and the current record
        first, then performs exactly one store write.  A raised exception
        means the store and the journal are unchanged.

    Non-goals:
        - Multi-record consumption (see ``ShipmentEngine``).
        - Locking (see ``InventoryLedger``).
    """

    def __init__(
        self,
        store: MaterialStore,
        journal: MovementJournal,
        catalog: MaterialCatalog = DEFAULT_CATALOG,
        clock: Clock | None = None,
        warning_threshold: int = WARNING_THRESHOLD,
    ):
        self._store = store
        self._journal = journal
        self._catalog = catalog
        self._clock = clock or SystemClock()
        self._warning_threshold = warning_threshold

    # =========================================================================
    # Creation / removal
    # =========================================================================

    def add_material(self, command: AddMaterialCommand) -> MaterialRecord:
        """
        Create a stock record.

        Serialized kinds take quantity 1 and a caller id.  Kinds that
        generate their id get ``"<name>-<epoch ms>"`` and a caller quantity.
        New records always start ``NORMAL``.

        Raises:
            UnknownMaterialKindError: name not in the catalog.
            QuantityConstraintError: serialized kind with quantity != 1.
            ValidationError: missing id or quantity, negative quantity.
            DuplicateMaterialIdError: id already in the store.
        """
        name = require_text(command.name, "name")
        kind = self._catalog.get(name)
        quantity = self._initial_quantity(kind, command.quantity)

        if kind.generates_id:
            material_id = self._generate_id(kind)
        else:
            material_id = require_text(command.material_id, "material_id")

        record = MaterialRecord(
            material_id=material_id,
            name=kind.name,
            quantity=quantity,
            status=MaterialStatus.NORMAL,
            last_update=self._clock.today(),
        )
        self._store.insert(record)
        self._journal.record(record, MovementType.ADD, quantity, record.last_update)

        logger.info(
            "material_added",
            extra={
                "material_id": material_id,
                "material_name": kind.name,
                "quantity": quantity,
            },
        )
        return record

    def delete_material(self, material_id: str) -> MaterialRecord:
        """Remove a record immediately and return what was removed."""
        removed = self._store.delete(material_id)
        self._journal.record(
            removed, MovementType.DELETE, -removed.quantity, self._clock.today()
        )
        logger.info(
            "material_deleted",
            extra={
                "material_id": material_id,
                "material_name": removed.name,
                "quantity_removed": removed.quantity,
            },
        )
        return removed

    # =========================================================================
    # Quantity movements
    # =========================================================================

    def issue_stock(self, material_id: str, quantity: int) -> MaterialRecord:
        """
        Issue ``quantity`` units of one material.

        Postconditions:
            ``new quantity == old quantity - quantity``; status re-derived
            unless pinned Abnormal.

        Raises:
            ValidationError: quantity is not a positive integer.
            MaterialNotFoundError: unknown id.
            InsufficientStockError: quantity exceeds quantity on hand.
        """
        quantity = require_int(quantity, "quantity", minimum=1)
        record = self._store.get(material_id)
        if quantity > record.quantity:
            raise InsufficientStockError(
                material_id, record.name, requested=quantity, available=record.quantity
            )
        updated = self._with_quantity(record, record.quantity - quantity)
        self._store.upsert(updated)
        self._journal.record(updated, MovementType.ISSUE, -quantity, updated.last_update)

        logger.info(
            "stock_issued",
            extra={
                "material_id": material_id,
                "quantity": quantity,
                "quantity_after": updated.quantity,
                "status": updated.status,
            },
        )
        return updated

    def receive_stock(self, material_id: str, quantity: int) -> MaterialRecord:
        """
        Receive ``quantity`` units into an existing record.

        Raises:
            ValidationError: quantity is not a positive integer.
            MaterialNotFoundError: unknown id.
            QuantityConstraintError: a serialized record would exceed 1.
        """
        quantity = require_int(quantity, "quantity", minimum=1)
        record = self._store.get(material_id)
        kind = self._catalog.get(record.name)
        new_quantity = record.quantity + quantity
        if kind.is_serialized and new_quantity > 1:
            raise QuantityConstraintError(
                kind.name, new_quantity, "serialized materials hold at most 1 unit"
            )
        updated = self._with_quantity(record, new_quantity)
        self._store.upsert(updated)
        self._journal.record(updated, MovementType.RECEIVE, quantity, updated.last_update)

        logger.info(
            "stock_received",
            extra={
                "material_id": material_id,
                "quantity": quantity,
                "quantity_after": updated.quantity,
                "status": updated.status,
            },
        )
        return updated

    # =========================================================================
    # Status overrides
    # =========================================================================

    def mark_abnormal(self, material_id: str, reason: str) -> MaterialRecord:
        """
        Pin a ``NORMAL`` record to ``ABNORMAL`` with a mandatory reason.

        Raises:
            ValidationError: blank reason.
            MaterialNotFoundError: unknown id.
            InvalidStatusTransitionError: record is not ``NORMAL``.
        """
        reason = require_text(reason, "reason")
        record = self._store.get(material_id)
        if record.status is not MaterialStatus.NORMAL:
            raise InvalidStatusTransitionError(
                material_id, record.status.value, "mark abnormal"
            )
        updated = replace(
            record,
            status=MaterialStatus.ABNORMAL,
            abnormal_reason=reason,
            last_update=self._clock.today(),
        )
        self._store.upsert(updated)
        self._journal.record(
            updated, MovementType.MARK_ABNORMAL, 0, updated.last_update, reference=reason
        )

        logger.info(
            "material_marked_abnormal",
            extra={"material_id": material_id, "reason": reason},
        )
        return updated

    def clear_abnormal(self, material_id: str) -> MaterialRecord:
        """
        Remove an Abnormal pin and re-derive status from quantity.

        Raises:
            MaterialNotFoundError: unknown id.
            InvalidStatusTransitionError: record is not ``ABNORMAL``.
        """
        record = self._store.get(material_id)
        if record.status is not MaterialStatus.ABNORMAL:
            raise InvalidStatusTransitionError(
                material_id, record.status.value, "clear abnormal"
            )
        updated = replace(
            record,
            status=derive_status(record.quantity, None, self._warning_threshold),
            abnormal_reason=None,
            last_update=self._clock.today(),
        )
        self._store.upsert(updated)
        self._journal.record(
            updated,
            MovementType.CLEAR_ABNORMAL,
            0,
            updated.last_update,
            reference=record.abnormal_reason,
        )

        logger.info(
            "material_abnormal_cleared",
            extra={"material_id": material_id, "status": updated.status},
        )
        return updated

    # =========================================================================
    # Helpers
    # =========================================================================

    def _initial_quantity(self, kind: MaterialKind, quantity: int | None) -> int:
        if kind.is_serialized:
            if quantity is None:
                return 1
            quantity = require_int(quantity, "quantity")
            if quantity != 1:
                raise QuantityConstraintError(
                    kind.name, quantity, "serialized materials must be added with quantity 1"
                )
            return quantity
        if quantity is None:
            raise ValidationError("quantity", "is required")
        return require_int(quantity, "quantity")

    def _generate_id(self, kind: MaterialKind) -> str:
        base = f"{kind.name}-{self._clock.timestamp_ms()}"
        material_id, suffix = base, 1
        while material_id in self._store:
            suffix += 1
            material_id = f"{base}-{suffix}"
        return material_id

    def _with_quantity(self, record: MaterialRecord, quantity: int) -> MaterialRecord:
        return replace(
            record,
            quantity=quantity,
            status=rederive(record, quantity, self._warning_threshold),
            last_update=self._clock.today(),
        )
