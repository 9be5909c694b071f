"""
Utility helpers for depflat.

This package provides reusable utilities used across depflat, including:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem read helpers
- External command execution

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from depflat.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from depflat.utils.filesystem import read_json_file, safe_read_file

# ---------------------------------------------------------------------------
# Shell utilities
# ---------------------------------------------------------------------------

from depflat.utils.shell import CommandResult, run_command

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from depflat.utils.console import (
    colorize_dependency_type,
    get_raw_console,
    print_error,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    # Console
    "print_error",
    "print_table",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    "colorize_dependency_type",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    # Filesystem
    "safe_read_file",
    "read_json_file",
    # Shell
    "CommandResult",
    "run_command",
]
