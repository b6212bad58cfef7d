"""
ShipmentEngine -- atomic bill-of-materials consumption for a shipment.

Responsibility:
    Ships one finished product: consumes one unit of every BOM component
    kind and appends a ``ShipmentRecord`` to the ``ShipmentLedger``.

Architecture position:
    Kernel > Services -- imperative shell over ``MaterialStore``,
    ``ShipmentLedger`` and ``MovementJournal``.  Called by
    ``InventoryLedger`` under its command lock, which keeps the phases
    below on one consistent snapshot.

Invariants enforced:
    ATOMIC_SHIPMENT -- four phases, and only the third writes stock:

        1. Resolve    every BOM role to a record that is not Abnormal.
        2. Validate   ``quantity - 1 >= 0`` for every resolved record.
        3. Commit     all decremented records in one ``put_many``.
        4. Record     the shipment and its stock movements.

    A failure in phase 1 or 2 leaves the store, the ledger and the journal
    exactly as they were.  Phases 3 and 4 cannot fail on validated input.

    NON_NEGATIVE_QUANTITY -- checked for all components before any write.
    STATUS_PIN -- committed records keep an Abnormal pin (none is resolved
    while pinned, but ``rederive`` is used regardless).

Failure modes:
    - ValidationError: missing SN / main board id / operator, bad date,
      unknown or wrong-kind main board id.
    - DuplicateSerialNumberError: SN already in the ledger.
    - InsufficientOrAbnormalStockError: a role has no eligible record.
    - InsufficientStockError: a resolved record has nothing on hand.

Audit relevance:
    The shipment record references the consumed record of every role,
    not only the main board, so each consumed unit is traceable.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from uuid import uuid4

from warehouse_kernel.domain.catalog import (
    DEFAULT_BOM,
    DEFAULT_CATALOG,
    MAIN_BOARD_ROLE,
    BillOfMaterials,
    BomComponent,
    MaterialCatalog,
)
from warehouse_kernel.domain.clock import Clock, SystemClock
from warehouse_kernel.domain.commands import ShipProductCommand
from warehouse_kernel.domain.material import MaterialRecord
from warehouse_kernel.domain.shipment import (
    ConsumedComponent,
    MovementType,
    ShipmentRecord,
)
from warehouse_kernel.domain.status import WARNING_THRESHOLD, rederive
from warehouse_kernel.domain.validation import (
    optional_text,
    require_date,
    require_text,
)
from warehouse_kernel.exceptions import (
    DuplicateSerialNumberError,
    InsufficientOrAbnormalStockError,
    InsufficientStockError,
    ValidationError,
)
from warehouse_kernel.logging_config import get_logger
from warehouse_kernel.services.material_store import MaterialStore
from warehouse_kernel.services.movement_journal import MovementJournal
from warehouse_kernel.services.shipment_ledger import ShipmentLedger

logger = get_logger("services.shipment_engine")


@dataclass(frozen=True)
class _ShipmentRequest:
    """Validated, normalized ShipProduct input."""
    serial_number: str
    main_board_material_id: str
    shipment_date: date
    operator: str
    product_name: str
    part_number: str
    remark: str | None


class ShipmentEngine:
    """
    Ships finished products against a fixed bill of materials.

    Contract:
        ``ship_product()`` either returns the appended ``ShipmentRecord``
        having decremented exactly one unit from exactly one record per
        BOM role, or raises with no observable change.

    Non-goals:
        - Locking (see ``InventoryLedger``).
        - More than one product BOM.
    """

    def __init__(
        self,
        store: MaterialStore,
        ledger: ShipmentLedger,
        journal: MovementJournal,
        bom: BillOfMaterials = DEFAULT_BOM,
        catalog: MaterialCatalog = DEFAULT_CATALOG,
        clock: Clock | None = None,
        warning_threshold: int = WARNING_THRESHOLD,
    ):
        bom.check_against(catalog)
        self._store = store
        self._ledger = ledger
        self._journal = journal
        self._bom = bom
        self._catalog = catalog
        self._clock = clock or SystemClock()
        self._warning_threshold = warning_threshold

    @property
    def bom(self) -> BillOfMaterials:
        return self._bom

    def ship_product(self, command: ShipProductCommand) -> ShipmentRecord:
        """
        Consume one unit of each BOM component and record the shipment.

        Preconditions:
            Caller holds the ledger lock.

        Postconditions:
            On success: every resolved record has quantity reduced by 1,
            the ledger has one more record, the journal one movement per
            component.  On failure: nothing changed.
        """
        request = self._validate_request(command)
        resolved = self._resolve(request.main_board_material_id)
        consumed = self._validate_consumption(resolved)
        self._commit(consumed)
        return self._record(request, consumed)

    # =========================================================================
    # Phase 0: input
    # =========================================================================

    def _validate_request(self, command: ShipProductCommand) -> _ShipmentRequest:
        request = _ShipmentRequest(
            serial_number=require_text(command.serial_number, "serial_number"),
            main_board_material_id=require_text(
                command.main_board_material_id, "main_board_material_id"
            ),
            shipment_date=require_date(command.shipment_date, "shipment_date"),
            operator=require_text(command.operator, "operator"),
            product_name=optional_text(command.product_name, "product_name")
            or self._bom.product_name,
            part_number=optional_text(command.part_number, "part_number")
            or self._bom.part_number,
            remark=optional_text(command.remark, "remark"),
        )
        if self._ledger.find_by_serial_number(request.serial_number) is not None:
            raise DuplicateSerialNumberError(request.serial_number)
        return request

    # =========================================================================
    # Phase 1: resolution
    # =========================================================================

    def _resolve(
        self, main_board_material_id: str
    ) -> list[tuple[BomComponent, MaterialRecord]]:
        resolved: list[tuple[BomComponent, MaterialRecord]] = []
        unavailable: list[BomComponent] = []

        for component in self._bom.components:
            if component.role == MAIN_BOARD_ROLE:
                record = self._resolve_main_board(component, main_board_material_id)
            else:
                record = self._first_eligible(component.material_name)
            if record is None:
                unavailable.append(component)
            else:
                resolved.append((component, record))

        if unavailable:
            raise InsufficientOrAbnormalStockError(
                tuple(c.role for c in unavailable),
                tuple(c.material_name for c in unavailable),
            )

        logger.debug(
            "shipment_components_resolved",
            extra={
                "components": [
                    {"role": c.role, "material_id": r.material_id} for c, r in resolved
                ],
            },
        )
        return resolved

    def _resolve_main_board(
        self, component: BomComponent, material_id: str
    ) -> MaterialRecord | None:
        """The operator's main board, or None when it is pinned Abnormal."""
        record = self._store.find(material_id)
        if record is None:
            raise ValidationError(
                "main_board_material_id", f"unknown material {material_id}"
            )
        if record.name != component.material_name:
            raise ValidationError(
                "main_board_material_id",
                f"{material_id} is a {record.name}, not a {component.material_name}",
            )
        return None if record.is_pinned else record

    def _first_eligible(self, material_name: str) -> MaterialRecord | None:
        """First record of the kind that is not Abnormal, preferring stock on hand."""
        candidates = [
            r for r in self._store.list()
            if r.name == material_name and not r.is_pinned
        ]
        if not candidates:
            return None
        return next((r for r in candidates if r.quantity > 0), candidates[0])

    # =========================================================================
    # Phase 2: validation
    # =========================================================================

    def _validate_consumption(
        self, resolved: list[tuple[BomComponent, MaterialRecord]]
    ) -> list[tuple[BomComponent, MaterialRecord]]:
        """Build every decremented record; raise before any of them is stored."""
        today = self._clock.today()
        consumed: list[tuple[BomComponent, MaterialRecord]] = []
        for component, record in resolved:
            new_quantity = record.quantity - 1
            if new_quantity < 0:
                raise InsufficientStockError(
                    record.material_id,
                    record.name,
                    requested=1,
                    available=record.quantity,
                )
            consumed.append(
                (
                    component,
                    replace(
                        record,
                        quantity=new_quantity,
                        status=rederive(record, new_quantity, self._warning_threshold),
                        last_update=today,
                    ),
                )
            )
        return consumed

    # =========================================================================
    # Phase 3: commit
    # =========================================================================

    def _commit(self, consumed: list[tuple[BomComponent, MaterialRecord]]) -> None:
        self._store.put_many(record for _, record in consumed)

    # =========================================================================
    # Phase 4: record
    # =========================================================================

    def _record(
        self,
        request: _ShipmentRequest,
        consumed: list[tuple[BomComponent, MaterialRecord]],
    ) -> ShipmentRecord:
        for _, record in consumed:
            self._journal.record(
                record,
                MovementType.SHIPMENT,
                -1,
                record.last_update,
                reference=request.serial_number,
            )
        shipment = ShipmentRecord(
            shipment_id=uuid4(),
            sequence=self._ledger.next_sequence(),
            serial_number=request.serial_number,
            product_name=request.product_name,
            part_number=request.part_number,
            main_board_material_id=request.main_board_material_id,
            shipment_date=request.shipment_date,
            operator=request.operator,
            consumed_components=tuple(
                ConsumedComponent(c.role, r.material_id, r.name) for c, r in consumed
            ),
            remark=request.remark,
        )
        self._ledger.append(shipment)

        logger.info(
            "shipment_committed",
            extra={
                "shipment_id": shipment.shipment_id,
                "serial_number": shipment.serial_number,
                "main_board_material_id": shipment.main_board_material_id,
                "consumed_material_ids": list(shipment.consumed_material_ids),
            },
        )
        return shipment
