"""
MaterialStore -- authoritative in-memory mapping of material id to record.

Responsibility:
    Holds the current ``MaterialRecord`` for every material id.  Every
    stock mutation in the kernel ends as a write to this store.

Architecture position:
    Kernel > Services -- stateful, in-memory.  Owned by exactly one
    ``InventoryLedger``; the services it wires share this instance.

Invariants enforced:
    UNIQUE_MATERIAL_ID -- ``insert()`` rejects an id already present,
    including duplicates among the seed records.

Failure modes:
    - MaterialNotFoundError: ``get()``, ``delete()`` or ``put_many()`` on
      an unknown id.
    - DuplicateMaterialIdError: ``insert()`` of an existing id.

Audit relevance:
    The store keeps only current state.  History lives in the
    ``MovementJournal`` and ``ShipmentLedger``.
"""

from collections.abc import Iterable

from warehouse_kernel.domain.material import MaterialRecord
from warehouse_kernel.exceptions import DuplicateMaterialIdError, MaterialNotFoundError
from warehouse_kernel.logging_config import get_logger

logger = get_logger("services.material_store")


class MaterialStore:
    """
    Insertion-ordered store of frozen material records.

    Contract:
        Records are immutable; a mutation replaces the stored record.
        ``list()`` returns a snapshot tuple, so callers never hold a view
        onto internal state.

    Guarantees:
        - Iteration order is insertion order.  Replacing a record keeps
          its position; the shipment engine's "first eligible record"
          rule depends on this.
        - ``put_many()`` validates every id before writing any record.

    Non-goals:
        - No locking.  ``InventoryLedger`` serializes access.
    """

    def __init__(self, records: Iterable[MaterialRecord] = ()):
        self._records: dict[str, MaterialRecord] = {}
        for record in records:
            self.insert(record)

    def get(self, material_id: str) -> MaterialRecord:
        """Return the record for ``material_id`` or raise MaterialNotFoundError."""
        try:
            return self._records[material_id]
        except KeyError:
            raise MaterialNotFoundError(material_id) from None

    def find(self, material_id: str) -> MaterialRecord | None:
        return self._records.get(material_id)

    def insert(self, record: MaterialRecord) -> MaterialRecord:
        """Add a new record; the id must not exist yet."""
        if record.material_id in self._records:
            logger.warning(
                "material_store_duplicate_id",
                extra={"material_id": record.material_id},
            )
            raise DuplicateMaterialIdError(record.material_id)
        self._records[record.material_id] = record
        return record

    def upsert(self, record: MaterialRecord) -> MaterialRecord:
        """Insert or replace the record for ``record.material_id``."""
        self._records[record.material_id] = record
        return record

    def put_many(self, records: Iterable[MaterialRecord]) -> None:
        """
        Replace several existing records in one step.

        Preconditions:
            Every record's id is already present in the store.

        Postconditions:
            Either all records are written or, on an unknown id, none are.
        """
        batch = list(records)
        for record in batch:
            if record.material_id not in self._records:
                raise MaterialNotFoundError(record.material_id)
        for record in batch:
            self._records[record.material_id] = record

    def delete(self, material_id: str) -> MaterialRecord:
        """Remove and return the record for ``material_id``."""
        try:
            return self._records.pop(material_id)
        except KeyError:
            raise MaterialNotFoundError(material_id) from None

    def list(self) -> tuple[MaterialRecord, ...]:
        return tuple(self._records.values())

    def __contains__(self, material_id: object) -> bool:
        return material_id in self._records

    def __len__(self) -> int:
        return len(self._records)
