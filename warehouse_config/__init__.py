"""
warehouse_config -- single public entrypoint for warehouse configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  Returns a frozen ``WarehouseConfig``.  YAML
    parsing lives in ``loader``; conversion to kernel objects lives in
    ``bridges``.

Architecture position:
    Configuration -- sits above ``warehouse_kernel`` and beside
    ``warehouse_services``.  The kernel MUST NEVER import from
    ``warehouse_config``.

Failure modes:
    - ``FileNotFoundError`` -- the requested configuration file is missing.
    - ``KeyError`` / ``ValueError`` -- schema violations in the YAML.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``warehouse_config_loaded`` log entry with the config_id, version,
    checksum and counts, tying later stock commands to the configuration
    in force.
"""

from __future__ import annotations

import logging
from pathlib import Path

from warehouse_config.loader import load_configuration
from warehouse_config.schema import WarehouseConfig

_logger = logging.getLogger("warehouse_kernel.config")

# Default configuration sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"
DEFAULT_CONFIG_PATH = _DEFAULT_CONFIG_DIR / "default.yaml"


def get_active_config(config_path: Path | str | None = None) -> WarehouseConfig:
    """The ONLY public configuration entrypoint.

    Guarantees:
        - A ``warehouse_config_loaded`` log entry is emitted on every
          successful call.

    Non-goals:
        - No caching; callers hold the returned config.

    Args:
        config_path: Override path to a configuration YAML file.
            Defaults to warehouse_config/sets/default.yaml.

    Raises:
        FileNotFoundError: If the file does not exist.
        KeyError: If a required key is missing.
        ValueError: If a value is invalid.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    config = load_configuration(path)

    _logger.info(
        "warehouse_config_loaded",
        extra={
            "config_id": config.config_id,
            "config_version": config.version,
            "config_checksum": config.checksum,
            "material_kind_count": len(config.material_kinds),
            "bom_component_count": len(config.product.components),
            "seed_material_count": len(config.seed_materials),
        },
    )
    return config


__all__ = ["DEFAULT_CONFIG_PATH", "WarehouseConfig", "get_active_config"]
