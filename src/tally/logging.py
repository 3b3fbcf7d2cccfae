"""Logging helpers used by the TALLY CLI and driver.

This module configures console logging with Rich, attaches the optional
results log file to the ``tally.results`` logger, and annotates third-party
log records with a short prefix used by console formatting.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

from .config import PROJECT_PREFIX, RESULTS_LOGGER

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

logger = logging.getLogger(__name__)


class ThirdPartyPrefixFilter(logging.Filter):
    """Annotate third-party log records with a short prefix.

    Records from loggers outside the project get ``record.prefix`` set to a
    bracketed token such as ``"[urllib3]"``; project records get an empty
    prefix. Records are never filtered out.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(PROJECT_PREFIX):
            record.prefix = f"[{record.name.split('.')[0]}]"
        else:
            record.prefix = ""
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Configure and return a RichHandler for console output on stderr.

    Args:
        level: Minimum level for console output (overridden to DEBUG in debug_mode).
        debug_mode: When True, show source paths and timestamps.
        color: Enable color output when True.

    Returns:
        RichHandler: Configured handler suitable to attach to the root logger.
    """
    # keep consistent with click-extra's --color / --no-color option
    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    fmt = "%(prefix)s %(message)s" if not debug_mode else "%(asctime)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt=fmt))
    if not debug_mode:
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_results_log(path: Path) -> logging.Handler | None:
    """Attach an append-mode file handler for the results log.

    The results log mirrors everything the harness prints. It is best-effort:
    if the file cannot be opened a warning is logged and ``None`` is returned,
    leaving console output unaffected.

    Args:
        path: File to append results to.

    Returns:
        The attached handler, or ``None`` if the file could not be opened.
    """
    try:
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    except OSError as e:
        logger.warning("Results log %s unavailable, continuing without it: %s", path, e)
        return None
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.getLogger(RESULTS_LOGGER).addHandler(handler)
    logger.debug("Results log: %s", path)
    return handler


def close_results_log(handler: logging.Handler) -> None:
    """Detach ``handler`` from the results logger and close it."""
    logging.getLogger(RESULTS_LOGGER).removeHandler(handler)
    handler.close()


def log_startup(
    log: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line startup summary and DEBUG-level diagnostics.

    Args:
        log: Logger used to emit startup messages.
        app_version: Application version string to display.
        level: Effective console logging level (numeric).
        handlers: Active logging handlers attached to the root logger.
        logger_levels: Mapping of logger names to their configured numeric levels.
    """
    log.info("TALLY %s, console=%s", app_version, logging.getLevelName(level))
    log.debug("Python: %s", sys.version.split()[0])
    log.debug("Platform: %s %s", platform.system(), platform.release())
    log.debug("PID: %s", os.getpid())
    log.debug("CWD: %s", Path.cwd())
    log.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if logger_levels:
        log.debug(
            "Per-logger overrides: %s",
            {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()},
        )
