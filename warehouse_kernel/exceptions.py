"""
Typed Exception Hierarchy for the Warehouse Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Every command either completes or fails with zero side effects. Callers
(console pages, scripts, the export collaborator) must be able to tell the
failures apart without parsing message strings:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (not just a message string)

Example:
    try:
        ledger.ship_product(command)
    except InsufficientOrAbnormalStockError as e:
        show_error(code=e.code, roles=e.unavailable_roles)
    except InsufficientStockError as e:
        show_error(code=e.code, kind=e.material_name)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

All exceptions inherit from WarehouseKernelError:

    WarehouseKernelError (base)
    |
    +-- ValidationError
    |   +-- QuantityConstraintError
    |   +-- UnknownMaterialKindError
    |   +-- DuplicateSerialNumberError
    |   +-- InvalidStatusTransitionError
    |
    +-- MaterialError
    |   +-- MaterialNotFoundError
    |   +-- DuplicateMaterialIdError
    |
    +-- StockError
    |   +-- InsufficientStockError
    |   +-- InsufficientOrAbnormalStockError
    |
    +-- LedgerError
        +-- ShipmentLedgerError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category     | Code                            | When Raised
-------------|---------------------------------|--------------------------------
Validation   | VALIDATION_ERROR                | Malformed or missing input
             | QUANTITY_CONSTRAINT             | Serialized kind quantity != 1
             | UNKNOWN_MATERIAL_KIND           | Name not in the catalog
             | DUPLICATE_SERIAL_NUMBER         | SN already shipped
             | INVALID_STATUS_TRANSITION       | Mark/clear from wrong status
-------------|---------------------------------|--------------------------------
Material     | MATERIAL_NOT_FOUND              | Unknown material id
             | DUPLICATE_MATERIAL_ID           | Insert with an existing id
-------------|---------------------------------|--------------------------------
Stock        | INSUFFICIENT_STOCK              | Movement would go negative
             | INSUFFICIENT_OR_ABNORMAL_STOCK  | BOM role has no eligible record
-------------|---------------------------------|--------------------------------
Ledger       | SHIPMENT_LEDGER_VIOLATION       | Append breaks append-only order

===============================================================================
DESIGN DECISIONS
===============================================================================

1. All classes inherit from Exception, not ValueError/KeyError, so domain
   errors are catchable as a group and never confused with programming
   errors.

2. ``code`` is a class attribute: usable without instantiation and stable
   across message wording changes.

3. All context is stored as attributes so the structured log formatter can
   emit it (``exc_<field>`` keys).

===============================================================================
"""


class WarehouseKernelError(Exception):
    """
    Base exception for all warehouse kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "WAREHOUSE_KERNEL_ERROR"


# Validation exceptions


class ValidationError(WarehouseKernelError):
    """Malformed or missing command input."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class QuantityConstraintError(ValidationError):
    """Quantity violates the tracking rule of the material kind."""

    code: str = "QUANTITY_CONSTRAINT"

    def __init__(self, material_name: str, quantity: int, reason: str):
        self.material_name = material_name
        self.quantity = quantity
        super().__init__("quantity", f"{reason} (kind {material_name}, got {quantity})")


class UnknownMaterialKindError(ValidationError):
    """Material name is not part of the catalog."""

    code: str = "UNKNOWN_MATERIAL_KIND"

    def __init__(self, material_name: str):
        self.material_name = material_name
        super().__init__("name", f"unknown material kind '{material_name}'")


class DuplicateSerialNumberError(ValidationError):
    """A shipment with this serial number is already in the ledger."""

    code: str = "DUPLICATE_SERIAL_NUMBER"

    def __init__(self, serial_number: str):
        self.serial_number = serial_number
        super().__init__(
            "serial_number", f"serial number {serial_number} was already shipped"
        )


class InvalidStatusTransitionError(ValidationError):
    """Status override requested from a status that does not allow it."""

    code: str = "INVALID_STATUS_TRANSITION"

    def __init__(self, material_id: str, current_status: str, action: str):
        self.material_id = material_id
        self.current_status = current_status
        self.action = action
        super().__init__(
            "status",
            f"cannot {action} material {material_id} in status {current_status}",
        )


# Material exceptions


class MaterialError(WarehouseKernelError):
    """Base exception for material record errors."""

    code: str = "MATERIAL_ERROR"


class MaterialNotFoundError(MaterialError):
    """Material with given ID was not found."""

    code: str = "MATERIAL_NOT_FOUND"

    def __init__(self, material_id: str):
        self.material_id = material_id
        super().__init__(f"Material not found: {material_id}")


class DuplicateMaterialIdError(MaterialError):
    """Material with given ID already exists."""

    code: str = "DUPLICATE_MATERIAL_ID"

    def __init__(self, material_id: str):
        self.material_id = material_id
        super().__init__(f"Material already exists: {material_id}")


# Stock exceptions


class StockError(WarehouseKernelError):
    """Base exception for stock availability errors."""

    code: str = "STOCK_ERROR"


class InsufficientStockError(StockError):
    """
    Requested quantity exceeds the quantity on hand.

    Raised for single-material issues and, during shipment validation, for
    the specific BOM component that would go negative.
    """

    code: str = "INSUFFICIENT_STOCK"

    def __init__(
        self,
        material_id: str,
        material_name: str,
        requested: int,
        available: int,
    ):
        self.material_id = material_id
        self.material_name = material_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock of {material_name} ({material_id}): "
            f"requested {requested}, available {available}"
        )


class InsufficientOrAbnormalStockError(StockError):
    """One or more BOM components have no eligible (non-Abnormal) record."""

    code: str = "INSUFFICIENT_OR_ABNORMAL_STOCK"

    def __init__(self, unavailable_roles: tuple[str, ...], material_names: tuple[str, ...]):
        self.unavailable_roles = unavailable_roles
        self.material_names = material_names
        super().__init__(
            "No eligible stock for component(s): "
            + ", ".join(
                f"{role} ({name})" for role, name in zip(unavailable_roles, material_names)
            )
        )


# Ledger exceptions


class LedgerError(WarehouseKernelError):
    """Base exception for append-only ledger errors."""

    code: str = "LEDGER_ERROR"


class ShipmentLedgerError(LedgerError):
    """Append would break the append-only ordering of the shipment ledger."""

    code: str = "SHIPMENT_LEDGER_VIOLATION"

    def __init__(self, shipment_id: str, reason: str):
        self.shipment_id = shipment_id
        self.reason = reason
        super().__init__(f"Cannot append shipment {shipment_id}: {reason}")
