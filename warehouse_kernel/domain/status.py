"""
Status Engine -- health status derivation.

Responsibility:
    Derives a record's ``MaterialStatus`` from its quantity and an optional
    manual override.  The only place the warning threshold is applied.

Architecture position:
    Kernel > Domain -- pure function, zero I/O.

Invariants enforced:
    STATUS_PIN -- a manual override always yields ABNORMAL, whatever the
    quantity, so an Issue or a shipment never clears a pin implicitly.
"""

from warehouse_kernel.domain.material import MaterialRecord, MaterialStatus

WARNING_THRESHOLD = 10


def derive_status(
    quantity: int,
    manual_override: str | None = None,
    warning_threshold: int = WARNING_THRESHOLD,
) -> MaterialStatus:
    """
    Derive the health status of a stock record.

    Rules, in order:
        1. ``manual_override`` present -> ``ABNORMAL``.
        2. ``quantity < warning_threshold`` -> ``WARNING``.
        3. otherwise -> ``NORMAL``.

    Examples:
        >>> derive_status(9)
        <MaterialStatus.WARNING: 'warning'>
        >>> derive_status(10)
        <MaterialStatus.NORMAL: 'normal'>
        >>> derive_status(500, manual_override="scratched")
        <MaterialStatus.ABNORMAL: 'abnormal'>
    """
    if manual_override:
        return MaterialStatus.ABNORMAL
    if quantity < warning_threshold:
        return MaterialStatus.WARNING
    return MaterialStatus.NORMAL


def rederive(record: MaterialRecord, quantity: int, warning_threshold: int = WARNING_THRESHOLD) -> MaterialStatus:
    """Status for ``record`` after its quantity changes to ``quantity``."""
    return derive_status(quantity, record.abnormal_reason, warning_threshold)
