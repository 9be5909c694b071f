"""
Terminal output for depflat reports, built on Rich.

Everything a command shows the user goes through the shared console
returned by :func:`get_raw_console`. Diagnostics belong in
:mod:`depflat.utils.logger` instead.

Color is disabled when ``NO_COLOR`` or ``CI`` is set, or when stdout is
not a terminal. The CLI calls :func:`reconfigure_console` after it has
applied ``--no-color`` so the next console picks the change up.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Mapping, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

DEPFLAT_THEME = Theme(
    {
        "error": "bold red",
        "warning": "bold yellow",
        "direct": "bold green",
        "transitive": "dim",
    }
)

#: Label colors for :class:`~depflat.models.DependencyType` values.
DEPENDENCY_TYPE_COLORS: Dict[str, str] = {
    "dependency": "green",
    "devdependency": "yellow",
}

_console: Optional[Console] = None
_console_lock = threading.Lock()


def _color_enabled() -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def get_raw_console() -> Console:
    """Return the shared Rich console, creating it on first use."""
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                color = _color_enabled()
                _console = Console(
                    theme=DEPFLAT_THEME,
                    no_color=not color,
                    highlight=color,
                )
    return _console


def reconfigure_console() -> None:
    """Drop the shared console so the next call re-reads the environment."""
    global _console
    with _console_lock:
        _console = None


def print_error(message: str) -> None:
    get_raw_console().print(f"[ERROR] {message}", style="error")


def print_warning(message: str) -> None:
    get_raw_console().print(f"[WARNING] {message}", style="warning")


def print_table(
    rows: List[Mapping[str, Any]],
    *,
    title: Optional[str] = None,
    column_styles: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> None:
    """Print ``rows`` as a table; columns follow the keys of the first row.

    ``column_styles`` maps a column name to keyword arguments for
    :meth:`rich.table.Table.add_column` (``style``, ``justify``,
    ``no_wrap``). Long cells fold instead of being cut off. Nothing is
    printed for an empty ``rows``.
    """
    if not rows:
        return

    columns = list(rows[0].keys())
    styles = column_styles or {}

    table = Table(title=title, show_header=True, header_style="bold")
    for column in columns:
        options = {"overflow": "fold", **styles.get(column, {})}
        table.add_column(column, **options)

    for row in rows:
        table.add_row(*(str(row.get(column, "")) for column in columns))

    get_raw_console().print(table)


def colorize_dependency_type(dependency_type: str) -> str:
    """Wrap a dependency type label in Rich markup for its color.

    Matching is case-insensitive; unknown labels are returned unchanged.
    """
    color = DEPENDENCY_TYPE_COLORS.get(dependency_type.lower())
    return f"[{color}]{dependency_type}[/{color}]" if color else dependency_type
