"""
WarehouseConfig schema.

Defines the human-authored, reviewable configuration of one warehouse:
the stock warning threshold, the material catalog, the product bill of
materials and the seed stock records.  YAML is parsed into these types by
the loader; ``bridges`` turns them into kernel objects.

These types carry plain strings and ints only.  The kernel's enums and
validation apply when the bridges build kernel objects from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class MaterialKindDef:
    """One catalog entry."""

    name: str
    tracking: str  # "serialized" or "bulk"
    generates_id: bool = False


@dataclass(frozen=True)
class BomComponentDef:
    """One BOM line: a role filled by one unit of a material kind."""

    role: str
    material: str


@dataclass(frozen=True)
class ProductDef:
    """The finished product shipped from this warehouse."""

    product_name: str
    part_number: str
    components: tuple[BomComponentDef, ...]


@dataclass(frozen=True)
class SeedMaterialDef:
    """A stock record present when the ledger starts."""

    material_id: str
    name: str
    quantity: int
    last_update: date
    status: str = "normal"
    abnormal_reason: str | None = None


@dataclass(frozen=True)
class WarehouseConfig:
    """
    Complete, versioned configuration of one warehouse.

    ``checksum`` is the SHA-256 of the canonical source document, used to
    tie log lines back to the exact configuration in force.
    """

    config_id: str
    version: int
    warning_threshold: int
    material_kinds: tuple[MaterialKindDef, ...]
    product: ProductDef
    seed_materials: tuple[SeedMaterialDef, ...] = ()
    description: str = ""
    checksum: str = ""
