"""
elfsize Structured Logger
==========================

Provides :class:`ElfSizeLogger`, a logging facade that emits human-friendly
Rich output on the error stream and, optionally, plain-text or JSON-lines
records to a rotating log file.

Standard output is reserved for the computed result, so the console handler
always writes to stderr.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)


# ========================== JSON Formatter =================================


class _JSONFormatter(logging.Formatter):
    """Emit each log record as a single-line JSON object.

    Output fields::

        {
          "timestamp": "...",
          "level": "DEBUG",
          "logger": "elfsize.calculator",
          "message": "...",
          "component": "calculator",
          "operation": "compute_size",
          "extra": { ... },
          "exc_info": "..."
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in ("component", "operation"):
            val = getattr(record, attr, None)
            if val is not None:
                entry[attr] = val

        extra = getattr(record, "elfsize_extra", None)
        if extra is not None:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


# ========================== Rich Console Handler ===========================


class _StderrRichHandler(RichHandler):
    """:class:`rich.logging.RichHandler` bound to a themed stderr console."""

    def __init__(self, **kwargs: Any) -> None:
        console = Console(theme=_LOG_THEME, stderr=True)
        super().__init__(
            console=console,
            show_path=False,
            show_time=True,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            markup=False,
            **kwargs,
        )


# ========================== ElfSizeLogger ==================================


class ElfSizeLogger:
    """Context-aware logger bound to one elfsize component.

    Each instance is bound to a *component* name (e.g. ``"calculator"``)
    and can carry a temporary *operation* context via a context manager.

    Usage::

        log = ElfSizeLogger("cli", log_level="DEBUG")
        with log.operation("compute_size"):
            log.debug("reading header of %s", path)

    Args:
        component:       Name of the elfsize component emitting the records.
        log_level:       Minimum severity (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file:        Path to the rotating log file. ``None`` disables file logging.
        json_logs:       If ``True`` the file handler emits JSON lines.
        max_bytes:       Maximum log-file size before rotation (default 10 MiB).
        backup_count:    Number of rotated backup files to keep.
        console_output:  If ``True`` attach the Rich stderr handler.
    """

    def __init__(
        self,
        component: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._component = component
        self._operation: str | None = None

        level = getattr(logging, log_level.upper(), logging.WARNING)

        self._logger = logging.getLogger(f"elfsize.{component}")
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Re-instantiation must not stack handlers
        self._logger.handlers.clear()

        if console_output:
            self._logger.addHandler(_StderrRichHandler(level=level))

        if log_file is not None:
            file_path = Path(log_file)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                filename=str(file_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            fh.setLevel(level)
            if json_logs:
                fh.setFormatter(_JSONFormatter())
            else:
                fh.setFormatter(
                    logging.Formatter(
                        fmt=(
                            "%(asctime)s | %(levelname)-8s | "
                            "%(name)s | %(message)s"
                        ),
                        datefmt="%Y-%m-%dT%H:%M:%S%z",
                    )
                )
            self._logger.addHandler(fh)

    # ------------------------------------------------------------------ #
    #  Context management -- operation scope
    # ------------------------------------------------------------------ #

    class _OperationContext:
        """Context manager that temporarily binds an operation name."""

        def __init__(self, parent: ElfSizeLogger, operation: str) -> None:
            self._parent = parent
            self._operation = operation
            self._prev: str | None = None

        def __enter__(self) -> ElfSizeLogger:
            self._prev = self._parent._operation
            self._parent._operation = self._operation
            return self._parent

        def __exit__(self, *exc: Any) -> None:
            self._parent._operation = self._prev

    def operation(self, name: str) -> _OperationContext:
        """Return a context manager that sets the *operation* field.

        While active, every log record carries ``operation=<name>``.
        """
        return self._OperationContext(self, name)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _enrich(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        """Inject the component/operation context via *extra*."""
        extra = kwargs.pop("extra", {}) or {}

        extra_data: dict[str, Any] = {}
        standard_keys = {"exc_info", "stack_info", "stacklevel"}
        for key in list(kwargs):
            if key not in standard_keys:
                extra_data[key] = kwargs.pop(key)

        extra["component"] = self._component
        extra["operation"] = self._operation
        if extra_data:
            extra["elfsize_extra"] = extra_data

        kwargs["extra"] = extra
        return kwargs

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs = self._enrich(kwargs)
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs = self._enrich(kwargs)
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs = self._enrich(kwargs)
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        kwargs = self._enrich(kwargs)
        self._logger.error(msg, *args, **kwargs)

    # ------------------------------------------------------------------ #
    #  Timing helper
    # ------------------------------------------------------------------ #

    class _TimingContext:
        """Context manager for measuring and logging elapsed time."""

        def __init__(self, logger_inst: ElfSizeLogger, label: str) -> None:
            self._logger = logger_inst
            self._label = label
            self._start: float = 0.0

        def __enter__(self) -> ElfSizeLogger._TimingContext:
            self._start = time.perf_counter()
            self._logger.debug("Started: %s", self._label)
            return self

        def __exit__(self, *exc: Any) -> None:
            self._logger.debug(
                "Completed: %s (%.6f sec)", self._label, self.elapsed
            )

        @property
        def elapsed(self) -> float:
            """Seconds elapsed since entering the context."""
            return time.perf_counter() - self._start

    def timed(self, label: str) -> _TimingContext:
        """Context manager that logs start / finish and elapsed time."""
        return self._TimingContext(self, label)

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def underlying(self) -> logging.Logger:
        """Direct access to the stdlib :class:`logging.Logger`."""
        return self._logger
