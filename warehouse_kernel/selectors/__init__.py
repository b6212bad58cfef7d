"""Selectors for the warehouse kernel (read side)."""

from warehouse_kernel.selectors.stock_selector import (
    InventoryOverview,
    KindStockSummary,
    StockSelector,
)

__all__ = [
    "InventoryOverview",
    "KindStockSummary",
    "StockSelector",
]
