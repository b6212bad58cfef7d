"""
Configuration Loader (``warehouse_config.loader``).

Responsibility
--------------
Loads a warehouse configuration YAML file and parses it into typed
``warehouse_config.schema`` dataclass instances.  Runtime callers go
through ``warehouse_config.get_active_config()``.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  No dependency on kernel
services; the kernel never imports this package.

Invariants enforced
-------------------
* All parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys in parsed dict  -> ``KeyError`` propagates.
* Invalid date, threshold or tracking value -> ``ValueError``.
* Non-integer quantity, threshold or version -> ``ValueError``; floats
  are never truncated.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from warehouse_config.schema import (
    BomComponentDef,
    MaterialKindDef,
    ProductDef,
    SeedMaterialDef,
    WarehouseConfig,
)

VALID_TRACKING_MODES = {"serialized", "bulk"}
VALID_SEED_STATUSES = {"normal", "warning", "abnormal"}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_date(value: Any) -> date:
    """
    Parse a date from YAML (string or date object).

    Raises:
        ValueError: if ``value`` is not a valid date representation.
    """
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def parse_int(value: Any, field: str) -> int:
    """
    Accept a YAML integer as-is.

    Raises:
        ValueError: if ``value`` is a float, bool, string or anything else
            that is not an integer.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an integer, got {value!r}")
    return value


def parse_material_kind(data: dict[str, Any]) -> MaterialKindDef:
    """Parse a ``MaterialKindDef``; ``name`` and ``tracking`` are required."""
    tracking = data["tracking"]
    if tracking not in VALID_TRACKING_MODES:
        raise ValueError(
            f"tracking must be one of {sorted(VALID_TRACKING_MODES)}, got '{tracking}'"
        )
    return MaterialKindDef(
        name=data["name"],
        tracking=tracking,
        generates_id=bool(data.get("generates_id", False)),
    )


def parse_product(data: dict[str, Any]) -> ProductDef:
    """
    Parse the product and its bill of materials.

    Raises:
        KeyError: if ``product_name``, ``part_number`` or a component's
            ``role`` / ``material`` is missing.
        ValueError: if no components are listed.
    """
    components = tuple(
        BomComponentDef(role=c["role"], material=c["material"])
        for c in data.get("components", [])
    )
    if not components:
        raise ValueError("product must list at least one BOM component")
    return ProductDef(
        product_name=data["product_name"],
        part_number=data["part_number"],
        components=components,
    )


def parse_seed_material(data: dict[str, Any]) -> SeedMaterialDef:
    """Parse a seed stock record."""
    status = data.get("status", "normal")
    if status not in VALID_SEED_STATUSES:
        raise ValueError(
            f"status must be one of {sorted(VALID_SEED_STATUSES)}, got '{status}'"
        )
    return SeedMaterialDef(
        material_id=str(data["material_id"]),
        name=data["name"],
        quantity=parse_int(data["quantity"], "quantity"),
        last_update=parse_date(data["last_update"]),
        status=status,
        abnormal_reason=data.get("abnormal_reason"),
    )


def parse_configuration(data: dict[str, Any]) -> WarehouseConfig:
    """
    Parse a whole configuration document.

    Postconditions:
        - ``checksum`` is ``compute_checksum(data)``.

    Raises:
        KeyError: if required keys are missing.
        ValueError: on invalid values.
    """
    threshold = parse_int(data.get("warning_threshold", 10), "warning_threshold")
    if threshold < 0:
        raise ValueError(f"warning_threshold cannot be negative, got {threshold}")

    return WarehouseConfig(
        config_id=data["config_id"],
        version=parse_int(data.get("version", 1), "version"),
        warning_threshold=threshold,
        material_kinds=tuple(parse_material_kind(k) for k in data["material_kinds"]),
        product=parse_product(data["product"]),
        seed_materials=tuple(
            parse_seed_material(m) for m in data.get("seed_materials", [])
        ),
        description=data.get("description", ""),
        checksum=compute_checksum(data),
    )


def load_configuration(path: Path) -> WarehouseConfig:
    """Load and parse a configuration YAML file."""
    return parse_configuration(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
