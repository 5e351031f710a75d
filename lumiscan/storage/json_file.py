"""JSON file-based implementation of PersistenceInterface.

The snapshot is the exact text produced by ``serialization.to_json``, written
to a single local file. Reading never raises: an unreadable file is reported
as "no prior data" and the store decides what to do with malformed text.
"""

import os
from pathlib import Path

from lumiscan.logging import setup_logging
from lumiscan.storage.interfaces import PersistenceInterface

DEFAULT_STORAGE_FILE = Path.home() / ".lumiscan" / "lumiscan_mvp_rows.json"


class JsonFilePersistence(PersistenceInterface):
    """Stores the row snapshot in a JSON file.

    Attributes:
        path: Location of the snapshot file. Its parent directory is created
            on the first save.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path is not None else DEFAULT_STORAGE_FILE
        self.logger = setup_logging()

    def load_at_startup(self) -> str | None:
        if not self.path.exists():
            self.logger.debug(
                {
                    "message": f"Snapshot file does not exist: {self.path}",
                    "storage_file": str(self.path),
                }
            )
            return None
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.warning(
                {
                    "message": f"Failed to read snapshot from {self.path}",
                    "storage_file": str(self.path),
                    "error": str(e),
                }
            )
            return None
        self.logger.debug(
            {
                "message": f"Read snapshot from {self.path}",
                "storage_file": str(self.path),
                "bytes": len(text),
            }
        )
        return text

    def save(self, snapshot_json: str) -> None:
        """Write the snapshot, replacing the file atomically.

        The text goes to a sibling temp file which is flushed, fsynced and
        renamed over the target, so a crash mid-write leaves the previous
        snapshot intact. A failed write removes the temp file. OSError
        propagates to the store.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(snapshot_json)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        self.logger.debug(
            {
                "message": f"Saved snapshot to {self.path}",
                "storage_file": str(self.path.absolute()),
                "bytes": len(snapshot_json),
            }
        )
