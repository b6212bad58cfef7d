"""
Material Domain Models (``warehouse_kernel.domain.material``).

Responsibility
--------------
Frozen value objects for the nouns of the stock ledger: material kinds,
their tracking mode, the health status enum, and the per-material stock
record.

Architecture
------------
Layer: **Kernel > Domain** -- pure data structures, zero I/O.  Records are
``frozen=True``; a mutation is expressed as a replacement record written
to the ``MaterialStore``.

Invariants
----------
- ``MaterialRecord.quantity`` is an ``int`` and never negative.
- ``abnormal_reason`` is present iff ``status`` is ``ABNORMAL``.

Failure Modes
-------------
- Construction of a ``MaterialRecord`` that violates an invariant raises
  ``ValueError`` immediately.  Services validate commands first and raise
  typed kernel errors, so this is a last line, not the reporting path.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from warehouse_kernel.logging_config import get_logger

logger = get_logger("domain.material")


class MaterialStatus(str, Enum):
    """Health status of a stock record."""
    NORMAL = "normal"
    WARNING = "warning"
    ABNORMAL = "abnormal"


class TrackingMode(str, Enum):
    """How units of a material kind are counted."""
    SERIALIZED = "serialized"  # one record per physical board, quantity 1
    BULK = "bulk"              # free quantity per record


@dataclass(frozen=True)
class MaterialKind:
    """
    One entry of the material catalog.

    Contract: ``generates_id`` kinds receive a synthetic material id at
    creation instead of a caller-supplied one.
    """
    name: str
    tracking: TrackingMode
    generates_id: bool = False

    @property
    def is_serialized(self) -> bool:
        return self.tracking is TrackingMode.SERIALIZED


@dataclass(frozen=True)
class MaterialRecord:
    """
    Stock record for one material id.

    Contract: Immutable.  Construction validates the quantity and
    status-pin invariants.

    Raises:
        ValueError: If any invariant is violated at construction time.
    """
    material_id: str
    name: str
    quantity: int
    status: MaterialStatus
    last_update: date
    abnormal_reason: str | None = None

    def __post_init__(self):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(
                f"quantity must be an integer (got {self.quantity!r})"
            )
        if self.quantity < 0:
            logger.warning(
                "material_record_negative_quantity",
                extra={
                    "material_id": self.material_id,
                    "quantity": self.quantity,
                },
            )
            raise ValueError(
                f"quantity must be non-negative (got {self.quantity})"
            )
        if self.status is MaterialStatus.ABNORMAL and not self.abnormal_reason:
            raise ValueError("abnormal records require an abnormal_reason")
        if self.status is not MaterialStatus.ABNORMAL and self.abnormal_reason is not None:
            raise ValueError(
                f"abnormal_reason is only allowed on abnormal records "
                f"(status {self.status.value})"
            )

    @property
    def is_pinned(self) -> bool:
        """True when the status is fixed by a manual Abnormal override."""
        return self.status is MaterialStatus.ABNORMAL
