"""Parse command implementation for depflat.

Offline counterpart of ``depflat scan``: parses listing output captured
earlier, or a lockfile and manifest pair, without running any package
manager.

Typical usage::

    $ yarn list > deps.txt && depflat parse -m yarn.lock --listing deps.txt
    $ npm list | depflat parse -m package-lock.json
    $ depflat parse -m npm-shrinkwrap.json --lockfile npm-shrinkwrap.json \\
          --manifest package.json --format json
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import IO, Any, Dict, List, Optional

import click

from depflat.models import PackageRecord
from depflat.context import pass_context, DepFlatContext
from depflat.exceptions import DepFlatError
from depflat.core import DependencyResolver
from depflat.commands.report import OUTPUT_FORMATS, display_records, filter_records
from depflat.constants import NPM_SHRINKWRAP_JSON, PACKAGE_JSON, SUPPORTED_MANIFEST_TYPES
from depflat.utils import get_logger, print_error, read_json_file

logger = get_logger("commands.parse")


@click.command()
@click.option(
    "--manifest-type",
    "-m",
    type=click.Choice(SUPPORTED_MANIFEST_TYPES),
    required=True,
    help="Format of the input.",
)
@click.option(
    "--listing",
    "-l",
    type=click.File("r", encoding="utf-8"),
    default="-",
    help="Captured 'yarn list' / 'npm list' output (default: stdin).",
)
@click.option(
    "--lockfile",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="npm-shrinkwrap.json to flatten.",
)
@click.option(
    "--manifest",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="package.json declaring direct dependencies "
    "(default: the one next to --lockfile, if present).",
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
def parse(
    ctx: DepFlatContext,
    manifest_type: str,
    listing: IO[str],
    lockfile: Optional[Path],
    manifest: Optional[Path],
    output_format: str,
    direct_only: bool,
    include_dev: Optional[bool],
) -> None:
    """Parse captured dependency data without running a package manager."""
    config = ctx.get_config()
    resolver = DependencyResolver(max_depth=config.max_depth)

    try:
        if manifest_type == NPM_SHRINKWRAP_JSON:
            records = _parse_tree(resolver, lockfile, manifest)
        else:
            records = resolver.resolve(manifest_type, output=listing.read())
    except DepFlatError as e:
        print_error(f"{e}")
        sys.exit(1)

    records = filter_records(
        records,
        include_dev=config.include_dev if include_dev is None else include_dev,
        direct_only=direct_only,
    )
    display_records(records, output_format.lower())


def _parse_tree(
    resolver: DependencyResolver,
    lockfile: Optional[Path],
    manifest: Optional[Path],
) -> List[PackageRecord]:
    if lockfile is None:
        raise click.UsageError(f"--lockfile is required for {NPM_SHRINKWRAP_JSON}")

    if manifest is None:
        sibling = lockfile.parent / PACKAGE_JSON
        manifest = sibling if sibling.is_file() else None

    tree = read_json_file(lockfile)
    manifest_data: Dict[str, Any] = read_json_file(manifest) if manifest else {}
    if manifest is None:
        logger.warning("No %s found; every package is reported as transitive", PACKAGE_JSON)

    return resolver.resolve(NPM_SHRINKWRAP_JSON, tree=tree, manifest=manifest_data)
