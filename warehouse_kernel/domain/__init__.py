"""
Warehouse kernel domain layer: pure value objects and functions, zero I/O.
"""

from warehouse_kernel.domain.catalog import (
    DEFAULT_BOM,
    DEFAULT_CATALOG,
    MAIN_BOARD_ROLE,
    BillOfMaterials,
    BomComponent,
    MaterialCatalog,
)
from warehouse_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from warehouse_kernel.domain.commands import AddMaterialCommand, ShipProductCommand
from warehouse_kernel.domain.material import (
    MaterialKind,
    MaterialRecord,
    MaterialStatus,
    TrackingMode,
)
from warehouse_kernel.domain.shipment import (
    ConsumedComponent,
    MovementType,
    ShipmentRecord,
    StockMovement,
)
from warehouse_kernel.domain.status import WARNING_THRESHOLD, derive_status

__all__ = [
    "DEFAULT_BOM",
    "DEFAULT_CATALOG",
    "MAIN_BOARD_ROLE",
    "BillOfMaterials",
    "BomComponent",
    "MaterialCatalog",
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "AddMaterialCommand",
    "ShipProductCommand",
    "MaterialKind",
    "MaterialRecord",
    "MaterialStatus",
    "TrackingMode",
    "ConsumedComponent",
    "MovementType",
    "ShipmentRecord",
    "StockMovement",
    "WARNING_THRESHOLD",
    "derive_status",
]
