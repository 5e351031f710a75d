"""
Lumiscan - review and export facts extracted from documents.

The core is a row store of (section, key, value, confidence, source span)
facts with stable identities, filter/search projections over it, and lossless
JSON snapshots persisted after every change.

    from lumiscan import InMemoryRowStore, JsonFilePersistence, SAMPLE_ROWS

    store = InMemoryRowStore.open(JsonFilePersistence("rows.json"))
    store.load(SAMPLE_ROWS)
"""

from lumiscan.errors import (
    EmptyExportRequestError,
    ExtractionFailedError,
    LumiscanError,
    MalformedInputError,
    PersistenceError,
    RowNotFoundError,
)
from lumiscan.export import ExportFormat, export_rows
from lumiscan.extraction import DocumentReference, ExtractorInterface, SimulatedExtractor
from lumiscan.row import (
    ConfidenceBand,
    DataRow,
    FieldUpdate,
    RowInput,
    SetConfidence,
    SetKey,
    SetSection,
    SetSourceSpan,
    SetValue,
    field_update,
)
from lumiscan.sample import SAMPLE_ROWS
from lumiscan.serialization import from_json, to_csv, to_json
from lumiscan.session import Notice, ReviewSession, View
from lumiscan.storage import (
    InMemoryPersistence,
    InMemoryRowStore,
    JsonFilePersistence,
    PersistenceInterface,
    RowStoreInterface,
)
from lumiscan.view import ALL_SECTIONS, FilterCriteria, distinct_sections, filter_rows

__all__ = [
    "LumiscanError",
    "RowNotFoundError",
    "MalformedInputError",
    "ExtractionFailedError",
    "EmptyExportRequestError",
    "PersistenceError",
    "ConfidenceBand",
    "DataRow",
    "RowInput",
    "FieldUpdate",
    "SetSection",
    "SetKey",
    "SetValue",
    "SetConfidence",
    "SetSourceSpan",
    "field_update",
    "SAMPLE_ROWS",
    "to_csv",
    "to_json",
    "from_json",
    "RowStoreInterface",
    "PersistenceInterface",
    "InMemoryRowStore",
    "InMemoryPersistence",
    "JsonFilePersistence",
    "ALL_SECTIONS",
    "FilterCriteria",
    "distinct_sections",
    "filter_rows",
    "ExportFormat",
    "export_rows",
    "DocumentReference",
    "ExtractorInterface",
    "SimulatedExtractor",
    "Notice",
    "ReviewSession",
    "View",
]

__version__ = "0.1.0"
