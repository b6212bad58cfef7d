"""
Module: warehouse_kernel.selectors.stock_selector
Responsibility: Read-only stock statistics for the warehouse dashboard:
    overall counts, per-kind totals, and the main boards an operator may
    pick for a shipment.
Architecture position: Kernel > Selectors.  Reads ``MaterialStore``
    snapshots; never writes.

Invariants enforced:
    - Read-only access: selectors only call ``MaterialStore.list()``.
    - DTO return convention: results are frozen dataclasses or tuples of
      frozen ``MaterialRecord``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from warehouse_kernel.domain.catalog import (
    DEFAULT_BOM,
    DEFAULT_CATALOG,
    BillOfMaterials,
    MaterialCatalog,
)
from warehouse_kernel.domain.material import MaterialRecord, MaterialStatus

if TYPE_CHECKING:
    from warehouse_kernel.services.material_store import MaterialStore


@dataclass(frozen=True)
class InventoryOverview:
    """Headline figures across all stock records."""
    record_count: int
    total_quantity: int
    warning_count: int
    abnormal_count: int


@dataclass(frozen=True)
class KindStockSummary:
    """Stock held for one catalog kind."""
    material_name: str
    record_count: int
    total_quantity: int


class StockSelector:
    """
    Read-only queries over a ``MaterialStore``.

    Contract:
        Every method takes one snapshot of the store, so its figures are
        mutually consistent.  Callers that need consistency with concurrent
        commands go through ``InventoryLedger``, which holds the lock.
    """

    def __init__(
        self,
        store: MaterialStore,
        catalog: MaterialCatalog = DEFAULT_CATALOG,
        bom: BillOfMaterials = DEFAULT_BOM,
    ):
        self._store = store
        self._catalog = catalog
        self._bom = bom

    def overview(self) -> InventoryOverview:
        records = self._store.list()
        return InventoryOverview(
            record_count=len(records),
            total_quantity=sum(r.quantity for r in records),
            warning_count=sum(1 for r in records if r.status is MaterialStatus.WARNING),
            abnormal_count=sum(1 for r in records if r.status is MaterialStatus.ABNORMAL),
        )

    def kind_summaries(self) -> tuple[KindStockSummary, ...]:
        """One summary per catalog kind, in catalog order, including empty kinds."""
        records = self._store.list()
        summaries = []
        for kind in self._catalog:
            of_kind = [r for r in records if r.name == kind.name]
            summaries.append(
                KindStockSummary(
                    material_name=kind.name,
                    record_count=len(of_kind),
                    total_quantity=sum(r.quantity for r in of_kind),
                )
            )
        return tuple(summaries)

    def materials_of_kind(self, material_name: str) -> tuple[MaterialRecord, ...]:
        return tuple(r for r in self._store.list() if r.name == material_name)

    def eligible_main_boards(self) -> tuple[MaterialRecord, ...]:
        """Main board records a shipment could consume right now."""
        return tuple(
            r for r in self.materials_of_kind(self._bom.main_board.material_name)
            if not r.is_pinned and r.quantity > 0
        )
