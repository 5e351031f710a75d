"""A single user's review session over the row store.

The session is what a front end (the CLI here, a web page elsewhere) talks
to. It owns the store, the current filter criteria and the active view, and
reports the outcome of every user action as a ``Notice``. No review-core
error escapes a session action; each one becomes a notice and the store is
left exactly as it was before the failed action.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from lumiscan.config import LumiscanConfig
from lumiscan.errors import EmptyExportRequestError, ExtractionFailedError, PersistenceError, RowNotFoundError
from lumiscan.export import DEFAULT_EXPORT_BASENAME, ExportFormat, export_rows
from lumiscan.extraction import DocumentReference, ExtractorInterface, SimulatedExtractor
from lumiscan.logging import setup_logging
from lumiscan.row import DataRow, FieldUpdate, field_update
from lumiscan.sample import SAMPLE_ROWS
from lumiscan.storage.interfaces import RowStoreInterface
from lumiscan.storage.json_file import JsonFilePersistence
from lumiscan.storage.memory import InMemoryRowStore
from lumiscan.view import FilterCriteria, distinct_sections, filter_rows

logger = setup_logging()


class View(str, Enum):
    """Pages of the review tool."""

    LANDING = "landing"
    UPLOAD = "upload"
    RESULTS = "results"
    ABOUT = "about"


class NoticeVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notice(BaseModel):
    """A user-visible message about the outcome of an action."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    variant: NoticeVariant = NoticeVariant.DEFAULT

    @property
    def is_error(self) -> bool:
        return self.variant is NoticeVariant.DESTRUCTIVE


class ReviewSession:
    """Owns a row store plus the state a reviewer sees around it.

    Lifecycle: construct with an opened store, then call actions. The store
    has already restored its persisted snapshot by the time it gets here.
    """

    def __init__(
        self,
        store: RowStoreInterface,
        extractor: ExtractorInterface | None = None,
        export_dir: Path | str = ".",
        export_basename: str = DEFAULT_EXPORT_BASENAME,
    ) -> None:
        self.store = store
        self.extractor = extractor if extractor is not None else SimulatedExtractor()
        self.export_dir = Path(export_dir)
        self.export_basename = export_basename
        self.active_view = View.LANDING
        self.criteria = FilterCriteria()
        self.notices: list[Notice] = []
        self.busy = False

    @classmethod
    def from_config(cls, config: LumiscanConfig) -> "ReviewSession":
        store = InMemoryRowStore.open(JsonFilePersistence(config.storage_path))
        return cls(
            store,
            extractor=SimulatedExtractor(delay=config.extraction_delay),
            export_dir=config.export_dir,
            export_basename=config.export_basename,
        )

    # --- notices and view state ---

    def notify(
        self,
        title: str,
        description: str,
        variant: NoticeVariant = NoticeVariant.DEFAULT,
    ) -> Notice:
        notice = Notice(title=title, description=description, variant=variant)
        self.notices.append(notice)
        return notice

    @property
    def last_notice(self) -> Notice | None:
        return self.notices[-1] if self.notices else None

    def set_view(self, view: View | str) -> None:
        self.active_view = View(view)

    def set_section_filter(self, section: str) -> None:
        self.criteria = self.criteria.model_copy(update={"section": section})

    def set_search(self, search: str) -> None:
        self.criteria = self.criteria.model_copy(update={"search": search})

    def visible_rows(self) -> list[DataRow]:
        return filter_rows(self.store.snapshot(), self.criteria)

    def sections(self) -> list[str]:
        return distinct_sections(self.store.snapshot())

    def _save_failed(self, error: PersistenceError) -> None:
        self.notify("Save Failed", f"Your change could not be saved: {error}", NoticeVariant.DESTRUCTIVE)

    # --- actions ---

    async def extract(self, source: DocumentReference) -> list[DataRow]:
        """Run the extractor and append its batch to the store.

        The view moves to upload while the extractor runs and to results on
        success. On failure the store is untouched, the view stays on upload
        and an "Extraction Failed" notice is added. Cancelling the awaiting
        task abandons the extraction without touching the store.
        """
        if self.busy:
            self.notify("Extraction In Progress", "Wait for the current extraction to finish.")
            return []
        self.busy = True
        self.active_view = View.UPLOAD
        try:
            try:
                batch = await self.extractor.extract(source)
            except ExtractionFailedError as e:
                logger.warning({"message": "Extraction failed", "source": source.label, "error": str(e)})
                self.notify(
                    "Extraction Failed",
                    "An error occurred while processing the document.",
                    NoticeVariant.DESTRUCTIVE,
                )
                return []
            except Exception:
                logger.exception({"message": "Extractor raised unexpectedly", "source": source.label})
                self.notify(
                    "Extraction Failed",
                    "An error occurred while processing the document.",
                    NoticeVariant.DESTRUCTIVE,
                )
                return []

            try:
                created = self.store.load(batch)
            except PersistenceError as e:
                self._save_failed(e)
                return []
            self.active_view = View.RESULTS
            self.notify(
                "Extraction Complete",
                f"Successfully extracted {len(created)} data points from the document.",
            )
            return created
        finally:
            self.busy = False

    def load_sample(self) -> list[DataRow]:
        """Replace the table with the built-in sample rows."""
        try:
            created = self.store.replace(SAMPLE_ROWS)
        except PersistenceError as e:
            self._save_failed(e)
            return []
        self.active_view = View.RESULTS
        self.notify("Sample Data Loaded", "Loaded sample nanomedicine research data.")
        return created

    def edit(self, row_id: str, change: FieldUpdate) -> DataRow | None:
        try:
            return self.store.update(row_id, change)
        except RowNotFoundError:
            self.notify("Row Not Found", "This data point has already been removed.")
        except PersistenceError as e:
            self._save_failed(e)
        return None

    def edit_field(self, row_id: str, field: str, raw: object) -> DataRow | None:
        """Edit from an untyped (field, value) pair, e.g. a form cell."""
        try:
            change = field_update(field, raw)
        except ValueError as e:
            self.notify("Invalid Value", str(e), NoticeVariant.DESTRUCTIVE)
            return None
        return self.edit(row_id, change)

    def delete(self, row_id: str) -> bool:
        try:
            self.store.delete(row_id)
        except RowNotFoundError:
            self.notify("Row Already Removed", "This data point has already been removed.")
            return False
        except PersistenceError as e:
            self._save_failed(e)
            return False
        self.notify("Row Deleted", "Data point has been removed.")
        return True

    def clear(self) -> int:
        """Remove every row. Returns how many were removed."""
        removed = self.store.count()
        try:
            self.store.replace([])
        except PersistenceError as e:
            self._save_failed(e)
            return 0
        self.notify("Data Cleared", f"Removed {removed} data points.")
        return removed

    def export(self, fmt: ExportFormat | str) -> Path | None:
        """Export the whole table (not just the visible rows)."""
        try:
            fmt = ExportFormat(fmt)
            path = export_rows(self.store.snapshot(), fmt, self.export_dir, self.export_basename)
        except EmptyExportRequestError:
            self.notify(
                "No Data to Export",
                "Please extract or load some data first.",
                NoticeVariant.DESTRUCTIVE,
            )
            return None
        except (OSError, ValueError) as e:
            logger.error({"message": "Export failed", "format": getattr(fmt, "value", fmt), "error": str(e)})
            self.notify("Export Failed", f"Could not export data: {e}", NoticeVariant.DESTRUCTIVE)
            return None
        self.notify("Export Successful", f"Data exported as {fmt.value.upper()} file.")
        return path
