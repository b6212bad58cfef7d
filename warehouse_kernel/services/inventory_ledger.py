"""
InventoryLedger -- the command surface of the warehouse kernel.

Responsibility:
    Owns one material store, one shipment ledger and one movement journal,
    wires the services that act on them, and exposes every command and
    query collaborators may call.

Architecture position:
    Kernel > Services -- outermost kernel object.  Console pages, scripts
    and ``warehouse_config.bridges`` construct it; nothing inside the
    kernel depends on it.

Invariants enforced:
    SERIALIZATION -- every command and query runs under one re-entrant
        lock, so the shipment engine's validate and commit phases see one
        snapshot and no issue or shipment can run between them.
    No process-wide state: seed records are passed in at construction.

Failure modes:
    Every ``WarehouseKernelError`` raised by a command propagates to the
    caller unchanged after a ``command_rejected`` warning is logged.  No
    failure leaves partial state behind.

Audit relevance:
    Each command runs under a ``LogContext`` carrying a correlation id and
    the command name, so all log lines of one command can be grouped.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from uuid import uuid4

from warehouse_kernel.domain.catalog import (
    DEFAULT_BOM,
    DEFAULT_CATALOG,
    BillOfMaterials,
    MaterialCatalog,
)
from warehouse_kernel.domain.clock import Clock, SystemClock
from warehouse_kernel.domain.commands import AddMaterialCommand, ShipProductCommand
from warehouse_kernel.domain.material import MaterialRecord
from warehouse_kernel.domain.shipment import ShipmentRecord, StockMovement
from warehouse_kernel.domain.status import WARNING_THRESHOLD
from warehouse_kernel.exceptions import QuantityConstraintError, WarehouseKernelError
from warehouse_kernel.logging_config import LogContext, get_logger
from warehouse_kernel.selectors.stock_selector import (
    InventoryOverview,
    KindStockSummary,
    StockSelector,
)
from warehouse_kernel.services.material_store import MaterialStore
from warehouse_kernel.services.movement_journal import MovementJournal
from warehouse_kernel.services.shipment_engine import ShipmentEngine
from warehouse_kernel.services.shipment_ledger import ShipmentLedger
from warehouse_kernel.services.stock_movement_service import StockMovementService

logger = get_logger("services.inventory_ledger")


class InventoryLedger:
    """
    Serialized facade over the stock store and its histories.

    Contract:
        Commands return the committed record or raise a typed error with no
        side effects.  Queries return snapshots (tuples of frozen records).

    Guarantees:
        - One lock guards all state; commands never interleave.
        - ``list_materials()`` after a committed command reflects exactly
          that command.

    Raises (construction):
        UnknownMaterialKindError: a seed record names a kind missing from
            the catalog.
        QuantityConstraintError: a serialized seed record holds more than 1.
        DuplicateMaterialIdError: two seed records share an id.

    Usage::

        ledger = InventoryLedger(seed_records, clock=SystemClock())
        ledger.add_material(AddMaterialCommand(name=MAIN_BOARD, material_id="M006"))
        ledger.ship_product(ShipProductCommand(
            serial_number="SN0001", main_board_material_id="M006",
            shipment_date=date.today(), operator="li.wei",
        ))
    """

    def __init__(
        self,
        records: Iterable[MaterialRecord] = (),
        *,
        catalog: MaterialCatalog = DEFAULT_CATALOG,
        bom: BillOfMaterials = DEFAULT_BOM,
        clock: Clock | None = None,
        warning_threshold: int = WARNING_THRESHOLD,
    ):
        self._lock = threading.RLock()
        self._clock = clock or SystemClock()
        self._catalog = catalog
        self._bom = bom

        records = list(records)
        for record in records:
            kind = catalog.get(record.name)
            if kind.is_serialized and record.quantity > 1:
                raise QuantityConstraintError(
                    kind.name, record.quantity, "serialized materials hold at most 1 unit"
                )
        self._store = MaterialStore(records)
        self._journal = MovementJournal()
        self._shipments = ShipmentLedger()

        self._movements = StockMovementService(
            self._store,
            self._journal,
            catalog=catalog,
            clock=self._clock,
            warning_threshold=warning_threshold,
        )
        self._engine = ShipmentEngine(
            self._store,
            self._shipments,
            self._journal,
            bom=bom,
            catalog=catalog,
            clock=self._clock,
            warning_threshold=warning_threshold,
        )
        self._selector = StockSelector(self._store, catalog=catalog, bom=bom)

        logger.info(
            "inventory_ledger_initialized",
            extra={
                "seed_record_count": len(records),
                "catalog_size": len(catalog),
                "product_name": bom.product_name,
                "warning_threshold": warning_threshold,
            },
        )

    @property
    def catalog(self) -> MaterialCatalog:
        return self._catalog

    @property
    def bom(self) -> BillOfMaterials:
        return self._bom

    # =========================================================================
    # Commands
    # =========================================================================

    def add_material(self, command: AddMaterialCommand) -> MaterialRecord:
        with self._command("add_material", material_id=command.material_id):
            return self._movements.add_material(command)

    def issue_stock(self, material_id: str, quantity: int) -> MaterialRecord:
        with self._command("issue_stock", material_id=material_id):
            return self._movements.issue_stock(material_id, quantity)

    def receive_stock(self, material_id: str, quantity: int) -> MaterialRecord:
        with self._command("receive_stock", material_id=material_id):
            return self._movements.receive_stock(material_id, quantity)

    def delete_material(self, material_id: str) -> None:
        with self._command("delete_material", material_id=material_id):
            self._movements.delete_material(material_id)

    def mark_abnormal(self, material_id: str, reason: str) -> MaterialRecord:
        with self._command("mark_abnormal", material_id=material_id):
            return self._movements.mark_abnormal(material_id, reason)

    def clear_abnormal(self, material_id: str) -> MaterialRecord:
        with self._command("clear_abnormal", material_id=material_id):
            return self._movements.clear_abnormal(material_id)

    def ship_product(self, command: ShipProductCommand) -> ShipmentRecord:
        with self._command(
            "ship_product",
            operator=command.operator if isinstance(command.operator, str) else None,
            serial_number=command.serial_number if isinstance(command.serial_number, str) else None,
        ):
            return self._engine.ship_product(command)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_material(self, material_id: str) -> MaterialRecord:
        with self._lock:
            return self._store.get(material_id)

    def list_materials(self) -> tuple[MaterialRecord, ...]:
        with self._lock:
            return self._store.list()

    def list_shipments(self) -> tuple[ShipmentRecord, ...]:
        with self._lock:
            return self._shipments.list()

    def list_movements(self, material_id: str | None = None) -> tuple[StockMovement, ...]:
        with self._lock:
            if material_id is None:
                return self._journal.list()
            return self._journal.for_material(material_id)

    def overview(self) -> InventoryOverview:
        with self._lock:
            return self._selector.overview()

    def kind_summaries(self) -> tuple[KindStockSummary, ...]:
        with self._lock:
            return self._selector.kind_summaries()

    def eligible_main_boards(self) -> tuple[MaterialRecord, ...]:
        with self._lock:
            return self._selector.eligible_main_boards()

    # =========================================================================
    # Internals
    # =========================================================================

    @contextmanager
    def _command(self, name: str, **context: str | None) -> Iterator[None]:
        correlation_id = LogContext.current().get("correlation_id") or str(uuid4())
        with self._lock, LogContext.bind(
            correlation_id=correlation_id, command=name, **context
        ):
            try:
                yield
            except WarehouseKernelError as exc:
                logger.warning(
                    "command_rejected",
                    extra={"error_code": exc.code, "error": str(exc)},
                )
                raise
