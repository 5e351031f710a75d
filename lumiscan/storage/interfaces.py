"""Storage interface definitions for the review table."""

from abc import ABC, abstractmethod
from typing import Iterator, Sequence

from lumiscan.row import DataRow, FieldUpdate, RowInput


class PersistenceInterface(ABC):
    """Durable home for the store's full snapshot.

    The store calls ``load_at_startup`` once when it is opened and ``save``
    after every successful mutation.
    """

    @abstractmethod
    def save(self, snapshot_json: str) -> None:
        """Persist the full snapshot, replacing any previous one.

        Implementations should raise on failure; the store undoes the
        mutation that triggered the save.
        """

    @abstractmethod
    def load_at_startup(self) -> str | None:
        """Return the last saved snapshot text, or None if there is none."""


class RowStoreInterface(ABC):
    """Abstract interface for the authoritative, ordered row collection."""

    @abstractmethod
    def load(self, rows: Sequence[RowInput]) -> list[DataRow]:
        """Append a batch, assigning each input a fresh identity.

        Input order is preserved and the batch lands after existing rows.
        Returns the stored rows in batch order.
        """

    @abstractmethod
    def replace(self, rows: Sequence[RowInput]) -> list[DataRow]:
        """Discard every existing row and load the batch in one step."""

    @abstractmethod
    def update(self, row_id: str, change: FieldUpdate) -> DataRow:
        """Apply a single-field update and return the new row.

        Raises RowNotFoundError if no row has that identity.
        """

    @abstractmethod
    def delete(self, row_id: str) -> DataRow:
        """Remove a row and return it.

        Raises RowNotFoundError if absent, including on a repeated delete.
        """

    @abstractmethod
    def get(self, row_id: str) -> DataRow | None:
        """Retrieve a row by identity, or None if not found."""

    @abstractmethod
    def snapshot(self) -> list[DataRow]:
        """Return every row in store order. Side-effect free."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored rows."""

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[DataRow]:
        return iter(self.snapshot())

    def __contains__(self, row_id: object) -> bool:
        return isinstance(row_id, str) and self.get(row_id) is not None
