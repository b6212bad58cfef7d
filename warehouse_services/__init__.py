"""
warehouse_services -- collaborators that read the warehouse kernel.

Responsibility:
    Reporting built on top of ``InventoryLedger`` queries.  Currently the
    shipment spreadsheet export.

Architecture position:
    Services -- above the kernel.

    Dependency direction (enforced by tests/architecture/test_warehouse_kernel_boundary.py):
        warehouse_services/ -> warehouse_kernel/  (allowed)
        warehouse_kernel/   -> warehouse_services/ (FORBIDDEN)
"""

from warehouse_services.shipment_export import (
    HEADERS,
    build_workbook,
    export_shipments,
    shipment_row,
)

__all__ = [
    "HEADERS",
    "build_workbook",
    "export_shipments",
    "shipment_row",
]
