"""Load lumiscan settings from TOML (e.g. lumiscan.toml).

Config file is looked up in order:
  1. Path in LUMISCAN_CONFIG env var (if set)
  2. lumiscan.toml in the current working directory

Settings live under a ``[lumiscan]`` table. If no file is found, or a file
cannot be parsed, built-in defaults are used.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lumiscan.export import DEFAULT_EXPORT_BASENAME
from lumiscan.extraction import DEFAULT_EXTRACTION_DELAY
from lumiscan.logging import setup_logging
from lumiscan.storage.json_file import DEFAULT_STORAGE_FILE

CONFIG_ENV = "LUMISCAN_CONFIG"
CONFIG_FILE_NAME = "lumiscan.toml"
_PATH_FIELDS = ("storage_path", "export_dir")

logger = setup_logging()


class LumiscanConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    storage_path: Path = Field(default=DEFAULT_STORAGE_FILE, description="Snapshot file.")
    export_dir: Path = Field(default=Path("."), description="Where exports are written.")
    export_basename: str = Field(default=DEFAULT_EXPORT_BASENAME, min_length=1)
    extraction_delay: float = Field(default=DEFAULT_EXTRACTION_DELAY, ge=0.0)
    log_level: str = Field(default="WARNING")


def _default_config_paths() -> list[Path]:
    """Return paths to check for lumiscan.toml (first existing wins)."""
    paths: list[Path] = []
    if os.environ.get(CONFIG_ENV):
        paths.append(Path(os.environ[CONFIG_ENV]))
    paths.append(Path.cwd() / CONFIG_FILE_NAME)
    return paths


def load_config(path: Path | str | None = None) -> LumiscanConfig:
    """Load settings from ``path`` or the first config file found.

    Relative paths set in the file are resolved against the file's
    directory; paths the file leaves out keep their defaults.
    """
    candidates = [Path(path)] if path is not None else _default_config_paths()
    for candidate in candidates:
        if not candidate.is_file():
            continue
        try:
            with open(candidate, "rb") as f:
                data = tomllib.load(f)
            section = data.get("lumiscan", {})
            if not isinstance(section, dict):
                raise ValueError("[lumiscan] must be a table")
            config = LumiscanConfig(**section)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning({"message": "Ignoring unusable config file", "path": str(candidate), "error": str(e)})
            continue
        base = candidate.resolve().parent
        return config.model_copy(
            update={
                name: _resolve(base, getattr(config, name))
                for name in _PATH_FIELDS
                if name in config.model_fields_set
            }
        )
    return LumiscanConfig()


def _resolve(base: Path, value: Path) -> Path:
    value = value.expanduser()
    return value if value.is_absolute() else base / value
