"""``tally run``: import test modules and execute their cases.

Behavior
- Each TARGET is a dotted module name or a path to a ``.py`` file. Importing
  it registers the cases it declares; no other discovery takes place.
- The report goes to **stdout**; the closing status line goes to **stderr**.
- The command exits with the driver's status: 0 when every check passed,
  1 otherwise.

Failure modes
- A target that cannot be imported → ``ClickException`` (exit status 1)
  before any case runs.
- An unwritable ``--log-file`` → warning; the run continues without it.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from tally.config import default_log_path
from tally.driver import Driver
from tally.errors import ModuleLoadError
from tally.loader import load_targets
from tally.registry import default_registry

from .helpers import error, success, warn

logger = logging.getLogger(__name__)

NO_CASES_MSG = "No test cases were registered by the given targets."


@click.command()
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Append the report to this file as well as printing it.",
    envvar="TALLY_LOG_FILE",
    show_envvar=True,
)
@click.option(
    "--save-log/--no-save-log",
    "save_log",
    default=False,
    help="Append the report to the default log file when --log-file is not given.",
    show_default=True,
)
@click.option(
    "--strict-throws/--lenient-throws",
    "strict_throws",
    default=False,
    help=(
        "Count a check_throws that caught a different exception type as a "
        "failure. By default it is reported but counted as a pass."
    ),
    show_default=True,
)
@click.pass_context
def run(
    ctx: click.Context,
    targets: tuple[str, ...],
    log_file: Path | None,
    save_log: bool,
    strict_throws: bool,
) -> None:
    """Run the test cases declared in TARGETS."""
    try:
        load_targets(targets)
    except ModuleLoadError as e:
        raise click.ClickException(str(e)) from e

    if len(default_registry()) == 0:
        warn(NO_CASES_MSG)

    if log_file is None and save_log:
        log_file = default_log_path()

    driver = Driver(strict_throws=strict_throws)
    driver.setup(log_file)
    try:
        status = driver.execute()
    finally:
        driver.teardown()

    if status == 0:
        success("All checks passed.")
    else:
        error("Some checks failed.")
    ctx.exit(status)
