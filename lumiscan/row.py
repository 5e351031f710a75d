"""Row model for the review table.

A row is one extracted fact: a (section, key) label, a value, a confidence
score and an optional provenance locator such as ``"p4"`` or ``"Fig 2A"``.
Rows are frozen pydantic models; the store changes a row by swapping in an
updated copy, so the identity of a row is the only thing that never changes.
"""

import uuid
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


def new_row_id() -> str:
    """Generate a fresh opaque row identity."""
    return str(uuid.uuid4())


class ConfidenceBand(str, Enum):
    """Coarse confidence grading used when displaying rows."""

    HIGH = "high"
    """Confidence of 0.9 or above."""

    MEDIUM = "medium"
    """Confidence in [0.8, 0.9)."""

    LOW = "low"
    """Confidence in [0.7, 0.8)."""

    CRITICAL = "critical"
    """Anything below 0.7, including out-of-range values."""


def confidence_band(confidence: float) -> ConfidenceBand:
    if confidence >= 0.9:
        return ConfidenceBand.HIGH
    if confidence >= 0.8:
        return ConfidenceBand.MEDIUM
    if confidence >= 0.7:
        return ConfidenceBand.LOW
    return ConfidenceBand.CRITICAL


class RowInput(BaseModel):
    """A row as produced by an extractor, before the store assigns an identity."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    section: str = Field(description="Free-text grouping label, e.g. 'Characterization'.")
    key: str = Field(description="Field name within the section.")
    value: str = Field(description="Extracted value, kept as text.")
    confidence: float = Field(
        allow_inf_nan=False,
        description="Extraction confidence. Intended range is [0, 1] but not enforced; must be finite.",
    )
    source_span: str | None = Field(
        default=None,
        alias="sourceSpan",
        description="Page or figure locator. None means absent, which is distinct from ''.",
    )

    def with_id(self, row_id: str) -> "DataRow":
        return DataRow(id=row_id, **self.model_dump())


class DataRow(RowInput):
    """A stored row with its immutable identity."""

    id: str = Field(description="Opaque identity assigned at insertion time.")

    @property
    def band(self) -> ConfidenceBand:
        return confidence_band(self.confidence)

    def search_text(self) -> str:
        """Text matched by free-text search: key, value and source span."""
        return f"{self.key} {self.value} {self.source_span or ''}"

    def to_input(self) -> RowInput:
        return RowInput(**self.model_dump(exclude={"id"}))


class FieldUpdate(BaseModel):
    """Base for typed single-field updates.

    Each subclass carries the new value under the same attribute name as the
    DataRow field it replaces, so applying one is a plain model_copy.
    """

    model_config = ConfigDict(frozen=True)

    field: ClassVar[str]

    @property
    def new_value(self) -> Any:
        return getattr(self, self.field)

    def apply(self, row: DataRow) -> DataRow:
        return row.model_copy(update={self.field: self.new_value})


class SetSection(FieldUpdate):
    field: ClassVar[str] = "section"
    section: str


class SetKey(FieldUpdate):
    field: ClassVar[str] = "key"
    key: str


class SetValue(FieldUpdate):
    field: ClassVar[str] = "value"
    value: str


class SetConfidence(FieldUpdate):
    field: ClassVar[str] = "confidence"
    confidence: float = Field(allow_inf_nan=False)


class SetSourceSpan(FieldUpdate):
    field: ClassVar[str] = "source_span"
    source_span: str | None


_UPDATES_BY_FIELD: dict[str, type[FieldUpdate]] = {
    "section": SetSection,
    "key": SetKey,
    "value": SetValue,
    "confidence": SetConfidence,
    "source_span": SetSourceSpan,
    "sourceSpan": SetSourceSpan,
}

EDITABLE_FIELDS = ("section", "key", "value", "confidence", "sourceSpan")


def field_update(field: str, raw: Any) -> FieldUpdate:
    """Build a typed update from an untyped (field name, value) pair.

    This is the boundary where form or command-line input becomes a typed
    update, so a non-numeric confidence fails here rather than in the store.

    Raises:
        ValueError: for an unknown field name or a value that does not
            validate for that field (pydantic's ValidationError is a
            ValueError).
    """
    try:
        update_cls = _UPDATES_BY_FIELD[field]
    except KeyError:
        raise ValueError(f"Unknown field {field!r}; expected one of {', '.join(EDITABLE_FIELDS)}") from None
    return update_cls(**{update_cls.field: raw})
