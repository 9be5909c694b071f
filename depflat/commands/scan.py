"""Scan command implementation for depflat.

Runs the package manager that owns a project directory and reports the
resolved dependencies as a flat, deduplicated list.

The manifest type is taken from ``--manifest-type``, then from the
configuration file, and finally detected from the lockfiles present in
the directory (``yarn.lock``, ``npm-shrinkwrap.json``,
``package-lock.json``, in that order).

Typical usage::

    $ depflat scan
    $ depflat scan ./frontend --format json --no-dev
    $ depflat scan --manifest-type npm-shrinkwrap.json --direct-only
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from depflat.context import pass_context, DepFlatContext
from depflat.exceptions import DepFlatError
from depflat.core import DependencyCollector, DependencyResolver, detect_manifest_type
from depflat.commands.report import OUTPUT_FORMATS, display_records, filter_records
from depflat.constants import AUTO_MANIFEST_TYPE, SUPPORTED_MANIFEST_TYPES
from depflat.utils import get_logger, print_error

logger = get_logger("commands.scan")


@click.command()
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--manifest-type",
    "-m",
    type=click.Choice([AUTO_MANIFEST_TYPE, *SUPPORTED_MANIFEST_TYPES]),
    default=None,
    help="Lockfile flavour to resolve (default: from config, else auto-detect).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--direct-only",
    is_flag=True,
    help="Show only dependencies declared by the project itself.",
)
@click.option(
    "--dev/--no-dev",
    "include_dev",
    default=None,
    help="Include or exclude development dependencies.",
)
@pass_context
def scan(
    ctx: DepFlatContext,
    directory: Path,
    manifest_type: Optional[str],
    output_format: str,
    direct_only: bool,
    include_dev: Optional[bool],
) -> None:
    """Resolve and list the dependencies of the project in DIRECTORY.

    Exits 0 on success (including projects without dependencies) and 1
    when the package manager fails or no supported lockfile is found.
    """
    config = ctx.get_config()

    try:
        selected = _select_manifest_type(
            directory, manifest_type or config.manifest_type
        )
        logger.info("Scanning %s as %s", directory, selected)

        collector = DependencyCollector(
            directory,
            resolver=DependencyResolver(max_depth=config.max_depth),
            timeout=config.command_timeout,
        )
        records = collector.collect(selected)

    except DepFlatError as e:
        print_error(f"{e}")
        sys.exit(1)

    records = filter_records(
        records,
        include_dev=config.include_dev if include_dev is None else include_dev,
        direct_only=direct_only,
    )
    display_records(records, output_format.lower())


def _select_manifest_type(directory: Path, requested: str) -> str:
    """Return ``requested`` unless it asks for auto-detection."""
    if requested != AUTO_MANIFEST_TYPE:
        return requested

    detected = detect_manifest_type(directory)
    if detected is None:
        raise DepFlatError(
            f"No supported lockfile found in {directory}",
            {"expected": ", ".join(SUPPORTED_MANIFEST_TYPES)},
        )
    return detected
