import inspect
import logging
import os
from pprint import pformat
from typing import Any

from pydantic import BaseModel

LOG_LEVEL_ENV = "LUMISCAN_LOG_LEVEL"


class PprintLogger:
    """A logger wrapper that pretty-prints structured log payloads.

    Review-session code logs dicts (``{"message": ..., "row_id": ...}``) and
    pydantic rows; this wrapper renders them readably while keeping the
    standard ``logging`` call surface.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _format_message(self, msg: Any, pprint: bool = True) -> str:
        """Format a message, optionally using pprint.

        Pydantic models (rows, criteria, notices) are rendered with
        model_dump_json(); other objects go through pformat.
        """
        if not pprint:
            return str(msg)
        if isinstance(msg, BaseModel):
            return msg.model_dump_json(indent=2)
        if isinstance(msg, str):
            return msg
        return pformat(msg, width=120, depth=None)

    def debug(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.debug(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def info(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.info(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def warning(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.warning(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def error(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.error(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def exception(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.exception(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def __getattr__(self, name: str) -> Any:
        """Delegate any other attributes to the underlying logger."""
        return getattr(self._logger, name)


def resolve_level(level: int | str | None) -> int:
    """Turn a level name, number, or None into a logging level.

    None falls back to $LUMISCAN_LOG_LEVEL, then WARNING. Unknown names map to
    WARNING rather than raising.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(name: str | None = None, level: int | str | None = None) -> PprintLogger:
    """Set up a module logger and return it wrapped in a PprintLogger.

    When ``name`` is omitted the caller's module name is used, so
    ``logger = setup_logging()`` at module level behaves like
    ``logging.getLogger(__name__)``.
    """
    if name is None:
        frame = inspect.currentframe().f_back  # type: ignore[union-attr]
        name = frame.f_globals.get("__name__", "lumiscan")  # type: ignore[union-attr]
    logger = logging.getLogger(name)
    if level is not None or not logger.handlers:
        logger.setLevel(resolve_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return PprintLogger(logger)


def set_level(level: int | str | None, prefix: str = "lumiscan") -> None:
    """Apply a level to every already-created logger under ``prefix``."""
    resolved = resolve_level(level)
    for name, candidate in logging.root.manager.loggerDict.items():
        if isinstance(candidate, logging.Logger) and (name == prefix or name.startswith(prefix + ".")):
            candidate.setLevel(resolved)
