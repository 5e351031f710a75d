"""Test fixtures and helpers for the review core.

This module provides:
- Factory helpers for row inputs and batches
- Persistence doubles: a failing one, on top of the real in-memory persistence
- Extractor doubles for success, failure, and unexpected errors
- Pytest fixtures wiring stores and sessions together with zero delays
"""

from pathlib import Path
from typing import Sequence

import pytest

from lumiscan.errors import ExtractionFailedError
from lumiscan.extraction import DocumentReference, ExtractorInterface, SimulatedExtractor
from lumiscan.row import RowInput
from lumiscan.sample import SAMPLE_ROWS
from lumiscan.session import ReviewSession
from lumiscan.storage.interfaces import PersistenceInterface
from lumiscan.storage.memory import InMemoryPersistence, InMemoryRowStore


def make_row_input(
    key: str = "Key",
    value: str = "Value",
    section: str = "Section",
    confidence: float = 0.9,
    source_span: str | None = None,
) -> RowInput:
    """Create a RowInput with sensible defaults."""
    return RowInput(section=section, key=key, value=value, confidence=confidence, source_span=source_span)


def make_batch(count: int, section: str = "Section") -> list[RowInput]:
    """Create ``count`` distinct inputs in one section."""
    return [make_row_input(key=f"key-{i}", value=f"value-{i}", section=section) for i in range(count)]


class FailingPersistence(PersistenceInterface):
    """Persistence whose saves fail once ``fail`` is switched on."""

    def __init__(self, initial: str | None = None) -> None:
        self.saved = initial
        self.fail = False

    def save(self, snapshot_json: str) -> None:
        if self.fail:
            raise OSError("disk full")
        self.saved = snapshot_json

    def load_at_startup(self) -> str | None:
        return self.saved


class FailingExtractor(ExtractorInterface):
    """Always reports an extraction failure."""

    async def extract(self, source: DocumentReference) -> list[RowInput]:
        raise ExtractionFailedError(f"cannot read {source.label}")


class BrokenExtractor(ExtractorInterface):
    """Raises an error that is not an ExtractionFailedError."""

    async def extract(self, source: DocumentReference) -> list[RowInput]:
        raise RuntimeError("service exploded")


class StaticExtractor(ExtractorInterface):
    """Returns a fixed batch and remembers what it was asked for."""

    def __init__(self, rows: Sequence[RowInput]) -> None:
        self.rows = list(rows)
        self.sources: list[DocumentReference] = []

    async def extract(self, source: DocumentReference) -> list[RowInput]:
        self.sources.append(source)
        return list(self.rows)


@pytest.fixture
def persistence() -> InMemoryPersistence:
    return InMemoryPersistence()


@pytest.fixture
def store(persistence: InMemoryPersistence) -> InMemoryRowStore:
    return InMemoryRowStore.open(persistence)


@pytest.fixture
def sample_store(store: InMemoryRowStore) -> InMemoryRowStore:
    """Store preloaded with the built-in sample rows."""
    store.load(SAMPLE_ROWS)
    return store


@pytest.fixture
def session(store: InMemoryRowStore, tmp_path: Path) -> ReviewSession:
    return ReviewSession(
        store,
        extractor=SimulatedExtractor(delay=0),
        export_dir=tmp_path / "exports",
    )


@pytest.fixture
def document() -> DocumentReference:
    return DocumentReference(file_name="paper.pdf")
