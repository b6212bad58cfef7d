#!/usr/bin/env python3
"""
Warehouse ledger walkthrough using the REAL kernel.

Loads the YAML config, builds an InventoryLedger seeded with M001-M005,
books a second set of boards, ships two calibrators, shows a rejected
shipment and a status pin, then prints stock and the shipment ledger.

Usage:
    python3 scripts/demo_warehouse.py
    python3 scripts/demo_warehouse.py --export shipments.xlsx
    python3 scripts/demo_warehouse.py --config my_warehouse.yaml --log-level DEBUG
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

SHIP_DATE = date(2024, 2, 21)


def _print_stock(ledger) -> None:
    print(f"  {'ID':<28} {'Material':<22} {'Qty':>5}  {'Status':<9} Updated")
    print(f"  {'-' * 28} {'-' * 22} {'-' * 5}  {'-' * 9} {'-' * 10}")
    for r in ledger.list_materials():
        status = r.status.value
        if r.abnormal_reason:
            status = f"{status} ({r.abnormal_reason})"
        print(f"  {r.material_id:<28} {r.name:<22} {r.quantity:>5}  {status:<9} {r.last_update}")

    ov = ledger.overview()
    print()
    print(
        f"  records={ov.record_count}  total={ov.total_quantity}  "
        f"warning={ov.warning_count}  abnormal={ov.abnormal_count}"
    )
    print()


def _print_shipments(ledger) -> None:
    for s in ledger.list_shipments():
        print(f"  #{s.sequence} {s.serial_number}  {s.product_name} ({s.part_number})")
        print(f"      shipped {s.shipment_date} by {s.operator}")
        for c in s.consumed_components:
            print(f"      - {c.role:<16} {c.material_id}")
    print()


def main() -> int:
    parser = argparse.ArgumentParser(description="Warehouse ledger walkthrough")
    parser.add_argument("--config", type=Path, default=None,
                        help="Configuration YAML (default: warehouse_config/sets/default.yaml)")
    parser.add_argument("--export", type=Path, default=None,
                        help="Write the shipment ledger to this .xlsx file")
    parser.add_argument("--log-level", default="CRITICAL",
                        help="Kernel log level (JSON lines on stderr)")
    args = parser.parse_args()

    from warehouse_config import get_active_config
    from warehouse_config.bridges import build_inventory_ledger
    from warehouse_kernel.domain.commands import AddMaterialCommand, ShipProductCommand
    from warehouse_kernel.exceptions import WarehouseKernelError
    from warehouse_kernel.logging_config import configure_logging

    configure_logging(level=getattr(logging, args.log_level.upper(), logging.CRITICAL))

    # -----------------------------------------------------------------
    # 1. Load YAML config
    # -----------------------------------------------------------------
    print()
    print("  [1/5] Loading YAML config...")
    config = get_active_config(args.config)
    print(f"         Config: {config.config_id} v{config.version}")
    print(f"         Product: {config.product.product_name} ({config.product.part_number})")
    print(f"         Seed records: {len(config.seed_materials)}")

    ledger = build_inventory_ledger(config)
    main_board, interface_board, light_board = (
        c.material for c in config.product.components[:3]
    )

    # -----------------------------------------------------------------
    # 2. Book a second board set and more shells
    # -----------------------------------------------------------------
    print("  [2/5] Booking boards M006-M008 and 20 top/bottom shells...")
    ledger.add_material(AddMaterialCommand(name=main_board, material_id="M006"))
    ledger.add_material(AddMaterialCommand(name=interface_board, material_id="M007"))
    ledger.add_material(AddMaterialCommand(name=light_board, material_id="M008"))
    for component in config.product.components[3:]:
        ledger.add_material(AddMaterialCommand(name=component.material, quantity=20))
    print()
    _print_stock(ledger)

    # -----------------------------------------------------------------
    # 3. Ship two calibrators
    # -----------------------------------------------------------------
    print("  [3/5] Shipping SN0001 (M001) and SN0002 (M006)...")
    for sn, board in (("SN0001", "M001"), ("SN0002", "M006")):
        shipment = ledger.ship_product(ShipProductCommand(
            serial_number=sn,
            main_board_material_id=board,
            shipment_date=SHIP_DATE,
            operator="demo",
        ))
        print(f"         shipped {shipment.serial_number} as #{shipment.sequence}")

    # -----------------------------------------------------------------
    # 4. Rejections
    # -----------------------------------------------------------------
    print("  [4/5] Attempting a third shipment on the spent board M001...")
    try:
        ledger.ship_product(ShipProductCommand(
            serial_number="SN0003",
            main_board_material_id="M001",
            shipment_date=SHIP_DATE,
            operator="demo",
        ))
    except WarehouseKernelError as exc:
        print(f"         rejected [{exc.code}]: {exc}")

    shell_id = ledger.list_materials()[-1].material_id
    print(f"         Pinning {shell_id} as abnormal...")
    ledger.mark_abnormal(shell_id, "cracked batch")
    print()
    _print_stock(ledger)

    # -----------------------------------------------------------------
    # 5. Shipment ledger
    # -----------------------------------------------------------------
    print("  [5/5] Shipment ledger:")
    print()
    _print_shipments(ledger)

    if args.export is not None:
        from warehouse_services.shipment_export import export_shipments

        path = export_shipments(ledger.list_shipments(), args.export)
        print(f"  Exported {len(ledger.list_shipments())} shipments to {path}")

    print("  Done.")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
