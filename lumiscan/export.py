"""Export the review table to a downloadable file.

The file name is fixed per format (``lumiscan-data.json`` /
``lumiscan-data.csv`` by default), so repeated exports overwrite the previous
artifact in the same directory. An empty table is never exported.
"""

from enum import Enum
from pathlib import Path
from typing import Sequence

from lumiscan.errors import EmptyExportRequestError
from lumiscan.logging import setup_logging
from lumiscan.row import DataRow
from lumiscan.serialization import to_csv, to_json

logger = setup_logging()

DEFAULT_EXPORT_BASENAME = "lumiscan-data"


class ExportFormat(str, Enum):
    """Supported export formats."""

    JSON = "json"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return f".{self.value}"


def export_filename(fmt: ExportFormat, basename: str = DEFAULT_EXPORT_BASENAME) -> str:
    return f"{basename}{fmt.extension}"


def render(rows: Sequence[DataRow], fmt: ExportFormat) -> str:
    if fmt is ExportFormat.JSON:
        return to_json(rows)
    return to_csv(rows)


def export_rows(
    rows: Sequence[DataRow],
    fmt: ExportFormat | str,
    directory: Path | str,
    basename: str = DEFAULT_EXPORT_BASENAME,
) -> Path:
    """Write ``rows`` to ``directory`` in the requested format.

    Args:
        rows: The rows to export, usually the full store snapshot.
        fmt: "json" or "csv".
        directory: Destination directory, created if missing.
        basename: File name without extension.

    Returns:
        Path of the written file.

    Raises:
        EmptyExportRequestError: if ``rows`` is empty; nothing is written.
        ValueError: for an unknown format.
        OSError: if the file cannot be written.
    """
    fmt = ExportFormat(fmt)
    if not rows:
        raise EmptyExportRequestError("There is no data to export")

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(fmt, basename)
    path.write_text(render(rows, fmt), encoding="utf-8")
    logger.info({"message": "Exported rows", "format": fmt.value, "rows": len(rows), "path": str(path)})
    return path
