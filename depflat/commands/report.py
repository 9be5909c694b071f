"""Shared filtering and rendering of package records for CLI commands.

Three output formats are supported:

- ``table`` — a Rich table followed by a one-line summary
- ``simple`` — one ``name@version`` line per package with its classification
- ``json`` — a JSON array of :meth:`PackageRecord.to_json` objects
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

import click

from depflat.models import PackageRecord
from depflat.utils import (
    colorize_dependency_type,
    get_raw_console,
    print_table,
    print_warning,
)

OUTPUT_FORMATS = ("table", "simple", "json")


def filter_records(
    records: Sequence[PackageRecord],
    *,
    include_dev: bool = True,
    direct_only: bool = False,
) -> List[PackageRecord]:
    """Apply the report filters without changing record order.

    Args:
        records: Resolved records.
        include_dev: Keep development dependencies.
        direct_only: Keep only packages the project declares itself.
    """
    return [
        record
        for record in records
        if (include_dev or not record.is_dev)
        and (not direct_only or record.is_direct)
    ]


def display_records(records: Sequence[PackageRecord], output_format: str) -> None:
    """Render ``records`` in ``output_format``."""
    if output_format == "json":
        _display_json(records)
        return

    if not records:
        print_warning("No packages found")
        return

    if output_format == "simple":
        _display_simple(records)
    else:
        _display_table(records)


def summarize(records: Sequence[PackageRecord]) -> Dict[str, int]:
    """Count records per classification."""
    direct = sum(1 for record in records if record.is_direct)
    dev = sum(1 for record in records if record.is_dev)
    return {
        "total": len(records),
        "direct": direct,
        "transitive": len(records) - direct,
        "dev": dev,
    }


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _display_table(records: Sequence[PackageRecord]) -> None:
    data: List[Dict[str, Any]] = [
        {
            "Package": record.name,
            "Version": record.version,
            "Relation": (
                "[direct]direct[/direct]"
                if record.is_direct
                else "[transitive]transitive[/transitive]"
            ),
            "Type": colorize_dependency_type(record.dependency_type.value),
            "Package URL": record.to_purl(),
        }
        for record in records
    ]

    column_styles: Dict[str, Dict[str, Any]] = {
        "Package": {"style": "bold cyan", "no_wrap": True},
        "Version": {"justify": "center"},
        "Relation": {"justify": "center"},
        "Type": {"justify": "center"},
        "Package URL": {"style": "dim"},
    }

    print_table(data, title="Dependencies", column_styles=column_styles)

    counts = summarize(records)
    get_raw_console().print(
        f"\n{counts['total']} package(s): {counts['direct']} direct, "
        f"{counts['transitive']} transitive, {counts['dev']} dev"
    )


def _display_simple(records: Sequence[PackageRecord]) -> None:
    for record in records:
        relation = "direct" if record.is_direct else "transitive"
        click.echo(f"{record} {relation} {record.dependency_type.value}")


def _display_json(records: Sequence[PackageRecord]) -> None:
    click.echo(json.dumps([record.to_json() for record in records], indent=2))
