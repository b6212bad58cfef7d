"""Services for the warehouse kernel (write side)."""

from warehouse_kernel.services.inventory_ledger import InventoryLedger
from warehouse_kernel.services.material_store import MaterialStore
from warehouse_kernel.services.movement_journal import MovementJournal
from warehouse_kernel.services.shipment_engine import ShipmentEngine
from warehouse_kernel.services.shipment_ledger import ShipmentLedger
from warehouse_kernel.services.stock_movement_service import StockMovementService

__all__ = [
    "InventoryLedger",
    "MaterialStore",
    "MovementJournal",
    "ShipmentEngine",
    "ShipmentLedger",
    "StockMovementService",
]
