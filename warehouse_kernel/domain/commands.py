"""
Command DTOs submitted to the inventory ledger.

These carry raw collaborator input (form values); nothing here is
validated.  The services validate every field before touching the store.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AddMaterialCommand:
    """
    Create a stock record.

    ``material_id`` is ignored for kinds that generate their own id.
    ``quantity`` defaults to 1 for serialized kinds when omitted.
    """
    name: str
    quantity: int | None = None
    material_id: str | None = None


@dataclass(frozen=True)
class ShipProductCommand:
    """
    Ship one finished product.

    ``product_name`` and ``part_number`` default to the BOM's values.
    """
    serial_number: str
    main_board_material_id: str
    shipment_date: date
    operator: str
    product_name: str | None = None
    part_number: str | None = None
    remark: str | None = None
