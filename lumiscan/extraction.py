"""Extraction collaborator interface.

Turning a document into facts happens outside the review core. The core
only needs an object that, given a document reference, eventually returns a
batch of ``RowInput`` or fails. The session awaits it and then ingests the
whole batch in one store call, so an extraction that is cancelled or fails
never touches the store.

Example implementations might use:
    - PDF text extraction followed by an LLM prompt per section
    - An HTTP call to a hosted extraction service for URLs
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lumiscan.errors import ExtractionFailedError
from lumiscan.logging import setup_logging
from lumiscan.row import RowInput
from lumiscan.sample import SAMPLE_ROWS

logger = setup_logging()

DEFAULT_EXTRACTION_DELAY = 2.0


class DocumentReference(BaseModel):
    """What to extract from: an uploaded file's name, a URL, or both."""

    model_config = ConfigDict(frozen=True)

    file_name: str | None = Field(default=None, description="Name of an uploaded PDF.")
    url: str | None = Field(default=None, description="Article URL.")

    @model_validator(mode="after")
    def needs_a_source(self) -> "DocumentReference":
        if not (self.file_name or "").strip() and not (self.url or "").strip():
            raise ValueError("A document reference needs a file name or a URL")
        return self

    @property
    def label(self) -> str:
        return (self.file_name or "").strip() or (self.url or "").strip()


class ExtractorInterface(ABC):
    """Produce a batch of rows from a document."""

    @abstractmethod
    async def extract(self, source: DocumentReference) -> list[RowInput]:
        """Extract facts from the referenced document.

        Args:
            source: The document to process.

        Returns:
            The extracted rows in document order. May be empty.

        Raises:
            ExtractionFailedError: if the document could not be processed.
        """


class SimulatedExtractor(ExtractorInterface):
    """Stand-in extractor: waits, then returns a fixed batch.

    Args:
        delay: Seconds to sleep before answering, imitating a service call.
        rows: Batch to return; defaults to the built-in sample rows.
        fail: When true, raise ExtractionFailedError instead of answering.
    """

    def __init__(
        self,
        delay: float = DEFAULT_EXTRACTION_DELAY,
        rows: Sequence[RowInput] = SAMPLE_ROWS,
        fail: bool = False,
    ) -> None:
        self.delay = delay
        self.rows = tuple(rows)
        self.fail = fail

    async def extract(self, source: DocumentReference) -> list[RowInput]:
        logger.info({"message": "Simulating extraction", "source": source.label, "delay": self.delay})
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise ExtractionFailedError(f"Could not process {source.label}")
        return list(self.rows)
