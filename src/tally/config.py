"""Configuration constants for TALLY.

The harness core reads no configuration files or environment variables. This
module only centralizes defaults shared by the core and the CLI.
"""

from pathlib import Path

from platformdirs import user_log_dir

PROJECT_PREFIX = "tally"

DEFAULT_WEIGHT = 1.0

RESULTS_LOGGER = "tally.results"  # pragma: no mutate
"""Logger that mirrors every display line; the results log file hangs off it."""


def default_log_path() -> Path:
    """Return the default results log file used by ``tally run``.

    Returns:
        ``latest.log`` inside the per-user log directory for TALLY. The
        directory is created if needed.
    """
    return Path(user_log_dir(PROJECT_PREFIX, appauthor=False, ensure_exists=True)) / (
        "latest.log"
    )
