"""
Material Catalog and Bill of Materials.

Responsibility:
    Declares which material kinds the warehouse stocks, how each kind is
    tracked, and which kinds one finished product consumes.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.  ``warehouse_config`` builds
    these objects from YAML; the kernel ships the defaults below so it can
    run without configuration.

Invariants enforced:
    - Kind names are unique within a catalog.
    - A bill of materials has exactly one ``main_board`` component, every
      role appears once, and every component kind exists in the catalog.

Failure modes:
    - ``UnknownMaterialKindError`` from ``MaterialCatalog.get``.
    - ``ValueError`` on constructing an inconsistent catalog or BOM.
"""

from dataclasses import dataclass

from warehouse_kernel.domain.material import MaterialKind, TrackingMode
from warehouse_kernel.exceptions import UnknownMaterialKindError

MAIN_BOARD_ROLE = "main_board"


class MaterialCatalog:
    """
    Ordered, read-only set of material kinds.

    Contract:
        Iteration follows declaration order (the order the console lists
        kinds in).  ``get()`` raises a typed error for unknown names.
    """

    def __init__(self, kinds: tuple[MaterialKind, ...] | list[MaterialKind]):
        self._kinds: dict[str, MaterialKind] = {}
        for kind in kinds:
            if kind.name in self._kinds:
                raise ValueError(f"Duplicate material kind in catalog: {kind.name}")
            self._kinds[kind.name] = kind

    def get(self, name: str) -> MaterialKind:
        try:
            return self._kinds[name]
        except KeyError:
            raise UnknownMaterialKindError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self):
        return iter(self._kinds.values())

    def __len__(self) -> int:
        return len(self._kinds)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._kinds)


@dataclass(frozen=True)
class BomComponent:
    """One line of a bill of materials: a role filled by one unit of a kind."""
    role: str
    material_name: str


@dataclass(frozen=True)
class BillOfMaterials:
    """
    Component kinds consumed to assemble one unit of a finished product.

    Every component consumes exactly one unit.
    """
    product_name: str
    part_number: str
    components: tuple[BomComponent, ...]

    def __post_init__(self):
        roles = [c.role for c in self.components]
        if len(set(roles)) != len(roles):
            raise ValueError(f"BOM roles must be unique, got {roles}")
        if roles.count(MAIN_BOARD_ROLE) != 1:
            raise ValueError(
                f"BOM must contain exactly one '{MAIN_BOARD_ROLE}' component"
            )
        # One record per kind is resolved, so a kind may fill only one role.
        kinds = [c.material_name for c in self.components]
        if len(set(kinds)) != len(kinds):
            raise ValueError(f"BOM material kinds must be unique, got {kinds}")

    @property
    def main_board(self) -> BomComponent:
        return next(c for c in self.components if c.role == MAIN_BOARD_ROLE)

    def check_against(self, catalog: MaterialCatalog) -> None:
        """Raise ``ValueError`` if a component kind is missing from ``catalog``."""
        missing = [c.material_name for c in self.components if c.material_name not in catalog]
        if missing:
            raise ValueError(f"BOM references kinds not in catalog: {missing}")


# -----------------------------------------------------------------------------
# Defaults: the FUC calibrator line
# -----------------------------------------------------------------------------

MAIN_BOARD = "FUC Main Board"
INTERFACE_BOARD = "FUC Interface Board"
LIGHT_BOARD = "FUC Light Board"
TOP_SHELL = "FUC Top Shell"
BOTTOM_SHELL = "FUC Bottom Shell"
POWER_ADAPTER = "FUC Power Adapter"

DEFAULT_CATALOG = MaterialCatalog(
    (
        MaterialKind(MAIN_BOARD, TrackingMode.SERIALIZED),
        MaterialKind(INTERFACE_BOARD, TrackingMode.SERIALIZED),
        MaterialKind(LIGHT_BOARD, TrackingMode.SERIALIZED),
        MaterialKind(TOP_SHELL, TrackingMode.BULK, generates_id=True),
        MaterialKind(BOTTOM_SHELL, TrackingMode.BULK, generates_id=True),
        MaterialKind(POWER_ADAPTER, TrackingMode.BULK),
    )
)

DEFAULT_BOM = BillOfMaterials(
    product_name="FUC Calibrator Body",
    part_number="HXF-FFV-RS-VRF",
    components=(
        BomComponent(MAIN_BOARD_ROLE, MAIN_BOARD),
        BomComponent("interface_board", INTERFACE_BOARD),
        BomComponent("light_board", LIGHT_BOARD),
        BomComponent("top_shell", TOP_SHELL),
        BomComponent("bottom_shell", BOTTOM_SHELL),
    ),
)
