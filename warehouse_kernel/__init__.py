"""
Warehouse Kernel - in-memory inventory ledger

A single-process stock ledger with:
- Non-negative, per-material stock records
- Quantity-derived health status with manual pins
- Atomic bill-of-materials consumption for shipments
- Append-only shipment ledger and movement journal
"""

__version__ = "0.1.0"
