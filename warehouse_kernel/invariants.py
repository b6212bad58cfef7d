"""
Kernel Invariants Contract.

These invariants are structural law. They are hardcoded in the store,
the movement processor and the shipment engine. No configuration value
may override them.

This module exists solely to declare these invariants explicitly. The
enforcement is distributed across MaterialRecord, MaterialStore,
StockMovementService, ShipmentEngine, ShipmentLedger and InventoryLedger.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel.

    Each value names one structural guarantee that the kernel provides
    unconditionally. Configuration may influence *what* is stocked, but
    never *whether* these rules apply.
    """

    NON_NEGATIVE_QUANTITY = "non_negative_quantity"
    """A material quantity never drops below zero. A movement that would
    do so is rejected in full. Enforced by MaterialRecord construction and
    by StockMovementService / ShipmentEngine validation."""

    UNIQUE_MATERIAL_ID = "unique_material_id"
    """Material ids are unique within a store. Enforced by
    MaterialStore.insert()."""

    ATOMIC_SHIPMENT = "atomic_shipment"
    """A shipment consumes all BOM components or none. Enforced by the
    resolve / validate / commit phases of ShipmentEngine."""

    STATUS_PIN = "status_pin"
    """A manual Abnormal pin survives quantity changes until it is cleared
    explicitly. Enforced by derive_status()."""

    APPEND_ONLY_LEDGER = "append_only_ledger"
    """Shipment records and stock movements are never updated or removed.
    Enforced by ShipmentLedger and MovementJournal."""

    SERIALIZATION = "serialization"
    """Every command runs under one lock, so validation and commit observe
    the same snapshot. Enforced by InventoryLedger."""


# All invariants as a frozenset for programmatic checks.
ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_warehouse_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "warehouse_config",
    "warehouse_services",
)
