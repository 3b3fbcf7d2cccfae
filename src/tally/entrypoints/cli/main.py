"""TALLY CLI entry point.

Defines the top-level ``tally`` command (via Click-Extra), configures console
logging, and registers the subcommands exposed by the project.

Currently available commands
- ``tally run``: import test modules and run their registered cases.

Examples
    $ tally --version
    $ tally run tests/math_cases.py
    $ tally -v run mypkg.checks --log-file results.log
"""

import logging
from typing import TYPE_CHECKING

import click
import click_extra as clickx

from tally import __version__
from tally.logging import config_console_handler, log_startup

from .helpers import parse_log_level
from .run import run as run_command

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """TALLY command-line interface.

    TALLY runs self-registering test cases in name order, prints a
    ``file(line):`` diagnostic for every failed check and ends with a weighted
    score. The exit status is 0 only when every check passed.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (DEBUG logging with source paths).",
    default=False,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Repeatable "
        "(e.g. -L tally.callsite=INFO) or via TALLY_LOGGER_LEVELS (comma/space list)."
    ),
    envvar="TALLY_LOGGER_LEVELS",
    default=("asyncio=WARNING",),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def tally(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    logger_levels: dict[str, int],
) -> None:
    """TALLY command-line interface."""

    # 0) compute effective verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    # 1) configure console handler
    use_color = ctx.color is not False  # None or True => allow color
    handlers: list[Handler] = [
        config_console_handler(level=level, debug_mode=debug, color=use_color)
    ]

    # 2) configure root logger
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # 3) per-logger levels
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


tally.add_command(run_command)
