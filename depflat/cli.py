"""
Command-line interface for depflat.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from depflat.config import load_config
from depflat.__version__ import __version__
from depflat.context import DepFlatContext
from depflat.exceptions import ConfigError, DepFlatError
from depflat.utils.logger import get_logger, setup_logging
from depflat.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="DEPFLAT_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="DEPFLAT_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="depflat",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """depflat — flat, auditable dependency lists for npm and Yarn projects.

    \b
    Available commands:
      depflat scan                 Run the package manager and list packages
      depflat parse                Parse captured listings or lockfiles

    \b
    Examples:
      depflat scan
      depflat scan ./web --format json
      yarn list | depflat parse -m yarn.lock

    Use ``depflat COMMAND --help`` for command-specific options.
    """
    _configure_logging(verbose)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    depflat_ctx = DepFlatContext()
    depflat_ctx.config_path = config or loaded_config.source_path
    depflat_ctx.color = color
    depflat_ctx.verbose = verbose
    depflat_ctx.config = loaded_config
    ctx.obj = depflat_ctx

    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    logger.debug("depflat v%s", __version__)
    logger.debug("Config path: %s", depflat_ctx.config_path)
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose > 1)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from depflat.commands.scan import scan  # noqa: E402
from depflat.commands.parse import parse  # noqa: E402

cli.add_command(scan)
cli.add_command(parse)


def main() -> int:
    """Main entry point for the depflat CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        result = cli(standalone_mode=False)
        return result if isinstance(result, int) else 0

    except click.exceptions.Exit as exc:
        return exc.exit_code

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except DepFlatError as exc:
        print_error(str(exc))
        logger.debug(
            "DepFlatError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
