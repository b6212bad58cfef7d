"""
Config -> Kernel Bridges.

Functions that convert a ``WarehouseConfig`` into kernel objects.  These
live in warehouse_config (the producer) because the kernel must NEVER
import warehouse_config.

Usage:
    from warehouse_config import get_active_config
    from warehouse_config.bridges import build_inventory_ledger

    config = get_active_config()
    ledger = build_inventory_ledger(config)
"""

from __future__ import annotations

from warehouse_config.schema import WarehouseConfig
from warehouse_kernel.domain.catalog import (
    BillOfMaterials,
    BomComponent,
    MaterialCatalog,
)
from warehouse_kernel.domain.clock import Clock
from warehouse_kernel.domain.material import (
    MaterialKind,
    MaterialRecord,
    MaterialStatus,
    TrackingMode,
)
from warehouse_kernel.services.inventory_ledger import InventoryLedger


def build_catalog(config: WarehouseConfig) -> MaterialCatalog:
    """Build the kernel ``MaterialCatalog`` in declaration order."""
    return MaterialCatalog(
        tuple(
            MaterialKind(
                name=k.name,
                tracking=TrackingMode(k.tracking),
                generates_id=k.generates_id,
            )
            for k in config.material_kinds
        )
    )


def build_bom(config: WarehouseConfig) -> BillOfMaterials:
    """
    Build the product ``BillOfMaterials``.

    Raises:
        ValueError: if the BOM has no or several ``main_board`` roles, or
            repeats a role or a kind.
    """
    product = config.product
    return BillOfMaterials(
        product_name=product.product_name,
        part_number=product.part_number,
        components=tuple(
            BomComponent(role=c.role, material_name=c.material)
            for c in product.components
        ),
    )


def build_seed_records(config: WarehouseConfig) -> tuple[MaterialRecord, ...]:
    """
    Build the seed ``MaterialRecord`` values.

    Seed status is taken as written: a freshly booked record starts out
    ``normal`` whatever its quantity, as records created through
    Add-Material do.
    """
    return tuple(
        MaterialRecord(
            material_id=m.material_id,
            name=m.name,
            quantity=m.quantity,
            status=MaterialStatus(m.status),
            last_update=m.last_update,
            abnormal_reason=m.abnormal_reason,
        )
        for m in config.seed_materials
    )


def build_inventory_ledger(
    config: WarehouseConfig,
    clock: Clock | None = None,
    seed: bool = True,
) -> InventoryLedger:
    """
    Build a ready-to-use ``InventoryLedger`` from configuration.

    Args:
        config: Loaded configuration.
        clock: Clock for record dates and generated ids.  Defaults to the
            ledger's ``SystemClock``.
        seed: When False the ledger starts empty.

    Raises:
        ValueError: on an inconsistent catalog, BOM or seed record.
        UnknownMaterialKindError: if a seed record names a kind missing
            from the catalog.
        QuantityConstraintError: if a serialized seed record holds more
            than one unit.
    """
    catalog = build_catalog(config)
    bom = build_bom(config)
    bom.check_against(catalog)
    return InventoryLedger(
        build_seed_records(config) if seed else (),
        catalog=catalog,
        bom=bom,
        clock=clock,
        warning_threshold=config.warning_threshold,
    )
