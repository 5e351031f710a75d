"""In-memory row store and persistence.

The row store keeps rows in an insertion-ordered ``dict[str, DataRow]`` keyed
by identity. Lookups are O(1); updates replace the value under an existing key
so they never move a row.

Every mutation is write-through: the new snapshot is handed to the injected
persistence before the call returns, and if that save fails the in-memory
change is rolled back. Not thread-safe; the store is owned by a single
review session.

Example:
    ```python
    store = InMemoryRowStore.open(JsonFilePersistence(path))
    rows = store.load(SAMPLE_ROWS)
    store.update(rows[0].id, SetValue(value="Breast carcinoma"))
    ```
"""

from typing import Sequence

from lumiscan.errors import MalformedInputError, PersistenceError, RowNotFoundError
from lumiscan.logging import setup_logging
from lumiscan.row import DataRow, FieldUpdate, RowInput, new_row_id
from lumiscan.serialization import from_json, to_json
from lumiscan.storage.interfaces import PersistenceInterface, RowStoreInterface

logger = setup_logging()


class InMemoryPersistence(PersistenceInterface):
    """Keeps the last saved snapshot in a string. Useful in tests and demos."""

    def __init__(self, initial: str | None = None) -> None:
        self.saved: str | None = initial
        self.save_count = 0

    def save(self, snapshot_json: str) -> None:
        self.saved = snapshot_json
        self.save_count += 1

    def load_at_startup(self) -> str | None:
        return self.saved


class NullPersistence(PersistenceInterface):
    """Discards every snapshot; the store starts empty each time."""

    def save(self, snapshot_json: str) -> None:
        return None

    def load_at_startup(self) -> str | None:
        return None


class InMemoryRowStore(RowStoreInterface):
    """Ordered, identity-keyed row store with write-through persistence."""

    def __init__(self, persistence: PersistenceInterface | None = None) -> None:
        """Initialize an empty store.

        Use ``InMemoryRowStore.open`` to also restore the persisted snapshot.
        """
        self._persistence = persistence if persistence is not None else NullPersistence()
        self._rows: dict[str, DataRow] = {}
        self._issued_ids: set[str] = set()
        self._restored = False

    @classmethod
    def open(cls, persistence: PersistenceInterface) -> "InMemoryRowStore":
        """Create a store and restore whatever the persistence holds."""
        store = cls(persistence)
        store.restore()
        return store

    @property
    def persistence(self) -> PersistenceInterface:
        return self._persistence

    def restore(self) -> int:
        """Replace the collection with the persisted snapshot.

        Called once per store. A missing snapshot leaves the store empty; a
        malformed one is logged and also leaves it empty. Returns the number
        of rows restored.
        """
        if self._restored:
            raise RuntimeError("Store has already been restored from persistence")
        self._restored = True

        text = self._persistence.load_at_startup()
        if text is None:
            logger.debug({"message": "No persisted snapshot, starting empty"})
            return 0
        try:
            rows = from_json(text)
        except MalformedInputError as e:
            logger.warning(
                {
                    "message": "Ignoring malformed persisted snapshot, starting empty",
                    "error": str(e),
                }
            )
            return 0

        self._rows = {row.id: row for row in rows}
        self._issued_ids.update(self._rows)
        logger.info({"message": "Restored persisted snapshot", "rows": len(rows)})
        return len(rows)

    def _fresh_id(self) -> str:
        row_id = new_row_id()
        while row_id in self._issued_ids:
            row_id = new_row_id()
        self._issued_ids.add(row_id)
        return row_id

    def _commit(self, new_rows: dict[str, DataRow]) -> None:
        """Persist ``new_rows`` and make it current, or leave everything as it was."""
        try:
            self._persistence.save(to_json(list(new_rows.values())))
        except Exception as e:
            logger.error(
                {
                    "message": "Failed to persist snapshot, mutation rolled back",
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise PersistenceError(f"Could not save snapshot: {e}") from e
        self._rows = new_rows

    def _ingest(self, base: dict[str, DataRow], rows: Sequence[RowInput]) -> list[DataRow]:
        issued_before = set(self._issued_ids)
        created = [row.with_id(self._fresh_id()) for row in rows]
        new_rows = dict(base)
        new_rows.update((row.id, row) for row in created)
        try:
            self._commit(new_rows)
        except PersistenceError:
            self._issued_ids = issued_before
            raise
        return created

    def load(self, rows: Sequence[RowInput]) -> list[DataRow]:
        created = self._ingest(self._rows, rows)
        logger.debug({"message": "Loaded batch", "added": len(created), "total": len(self._rows)})
        return created

    def replace(self, rows: Sequence[RowInput]) -> list[DataRow]:
        dropped = len(self._rows)
        created = self._ingest({}, rows)
        logger.debug({"message": "Replaced collection", "dropped": dropped, "added": len(created)})
        return created

    def update(self, row_id: str, change: FieldUpdate) -> DataRow:
        current = self._rows.get(row_id)
        if current is None:
            raise RowNotFoundError(row_id)
        updated = change.apply(current)
        new_rows = dict(self._rows)
        new_rows[row_id] = updated
        self._commit(new_rows)
        logger.debug({"message": "Updated row", "row_id": row_id, "field": change.field})
        return updated

    def delete(self, row_id: str) -> DataRow:
        if row_id not in self._rows:
            raise RowNotFoundError(row_id)
        new_rows = dict(self._rows)
        removed = new_rows.pop(row_id)
        self._commit(new_rows)
        logger.debug({"message": "Deleted row", "row_id": row_id, "total": len(new_rows)})
        return removed

    def get(self, row_id: str) -> DataRow | None:
        return self._rows.get(row_id)

    def snapshot(self) -> list[DataRow]:
        return list(self._rows.values())

    def count(self) -> int:
        return len(self._rows)
