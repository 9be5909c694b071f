"""
Shared context object for depflat CLI commands.

This module defines the global Click context used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from depflat.config import DepFlatConfig


class DepFlatContext:
    """Global context object for depflat CLI commands.

    Attributes:
        config_path: Path to the depflat configuration file, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, or ``None`` before loading.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[DepFlatConfig] = None

    def get_config(self) -> DepFlatConfig:
        """Return the loaded configuration, or defaults if none was loaded."""
        return self.config if self.config is not None else DepFlatConfig()


#: Click decorator for injecting :class:`DepFlatContext` into commands.
pass_context = click.make_pass_decorator(DepFlatContext, ensure=True)
