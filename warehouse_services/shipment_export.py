"""
Shipment spreadsheet export.

Renders the shipment ledger as an ``.xlsx`` workbook with one row per
shipment: shipment id, product name, SN, date, operator.  Reads only the
tuple returned by ``InventoryLedger.list_shipments()``.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from openpyxl import Workbook

from warehouse_kernel.domain.shipment import ShipmentRecord
from warehouse_kernel.logging_config import get_logger

logger = get_logger("services.shipment_export")

SHEET_TITLE = "Shipments"
HEADERS = ("Shipment ID", "Product Name", "SN", "Date", "Operator")

# Column widths in characters, matching HEADERS.
_COLUMN_WIDTHS = {"A": 38, "B": 24, "C": 16, "D": 12, "E": 16}


def shipment_row(shipment: ShipmentRecord) -> tuple[str, str, str, str, str]:
    """Cell values for one shipment, in ``HEADERS`` order."""
    return (
        str(shipment.shipment_id),
        shipment.product_name,
        shipment.serial_number,
        shipment.shipment_date.isoformat(),
        shipment.operator,
    )


def build_workbook(shipments: Iterable[ShipmentRecord]) -> Workbook:
    """Build an in-memory workbook: header row, then shipments in ledger order."""
    wb = Workbook()
    sheet = wb.active
    sheet.title = SHEET_TITLE
    sheet.append(HEADERS)
    for shipment in shipments:
        sheet.append(shipment_row(shipment))
    for column, width in _COLUMN_WIDTHS.items():
        sheet.column_dimensions[column].width = width
    sheet.freeze_panes = "A2"
    return wb


def export_shipments(shipments: Iterable[ShipmentRecord], path: Path | str) -> Path:
    """
    Write ``shipments`` to an ``.xlsx`` file at ``path``.

    Parent directories must exist.  An existing file is overwritten.

    Returns:
        The path written.
    """
    shipments = tuple(shipments)
    path = Path(path)
    wb = build_workbook(shipments)
    wb.save(path)
    logger.info(
        "shipments_exported",
        extra={"path": str(path), "shipment_count": len(shipments)},
    )
    return path
