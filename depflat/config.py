"""Configuration file loader for depflat.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``depflat.toml`` — settings under ``[depflat]`` table
- ``pyproject.toml`` — settings under ``[tool.depflat]`` table

Discovery order:

1. Explicit path from ``--config`` or ``DEPFLAT_CONFIG``
2. ``depflat.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.depflat]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``depflat.toml``)::

    [depflat]
    manifest_type = "yarn.lock"
    include_dev = false
    max_depth = 32
    command_timeout = 120
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from depflat.exceptions import ConfigError
from depflat.utils.logger import get_logger
from depflat.constants import (
    AUTO_MANIFEST_TYPE,
    DEFAULT_INCLUDE_DEV,
    DEFAULT_MAX_DEPTH,
    SUPPORTED_MANIFEST_TYPES,
)

logger = get_logger("config")


@dataclass
class DepFlatConfig:
    """Parsed and validated depflat configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        manifest_type: Manifest selector, or ``"auto"`` to detect it from
            the lockfiles present in the scanned directory.
        include_dev: Report development dependencies.
        max_depth: Deepest lockfile nesting level followed when flattening.
        command_timeout: Seconds allowed per package-manager command, or
            ``None`` for no limit.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    manifest_type: str = AUTO_MANIFEST_TYPE
    include_dev: bool = DEFAULT_INCLUDE_DEV
    max_depth: int = DEFAULT_MAX_DEPTH
    command_timeout: Optional[float] = None

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging."""
        return {
            "manifest_type": self.manifest_type,
            "include_dev": self.include_dev,
            "max_depth": self.max_depth,
            "command_timeout": self.command_timeout,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    depflat_toml = cwd / "depflat.toml"
    if depflat_toml.is_file():
        logger.debug("Found depflat.toml: %s", depflat_toml)
        return depflat_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_depflat_section(pyproject_toml):
        logger.debug("Found [tool.depflat] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_depflat_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.depflat] section.

    Parse errors are treated as "no section" so that an unrelated, broken
    pyproject.toml does not stop depflat from running with defaults.
    """
    try:
        raw = _read_toml(path)
    except ConfigError:
        return False
    return "depflat" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> DepFlatConfig:
    """Load and validate depflat configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`DepFlatConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return DepFlatConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("depflat", {})
    else:
        section = raw.get("depflat", {})

    if not section:
        logger.debug("Config file found but no depflat section, using defaults")
        return DepFlatConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> DepFlatConfig:
    """Parse and validate a ``[depflat]`` or ``[tool.depflat]`` table.

    Raises:
        ConfigError: Unknown keys, incorrect types or out-of-range values.
    """
    config = DepFlatConfig()

    known_top = {
        "manifest_type",
        "include_dev",
        "max_depth",
        "command_timeout",
    }

    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=config_path,
        )

    if "manifest_type" in section:
        val = section["manifest_type"]
        allowed = (AUTO_MANIFEST_TYPE, *SUPPORTED_MANIFEST_TYPES)
        if not isinstance(val, str) or val not in allowed:
            raise ConfigError(
                f"manifest_type must be one of {', '.join(allowed)}, got {val!r}",
                config_path=config_path,
                option="manifest_type",
            )
        config.manifest_type = val

    if "include_dev" in section:
        val = section["include_dev"]
        if not isinstance(val, bool):
            raise ConfigError(
                f"include_dev must be a boolean, got {type(val).__name__}",
                config_path=config_path,
                option="include_dev",
            )
        config.include_dev = val

    if "max_depth" in section:
        val = section["max_depth"]
        # bool is a subclass of int and must not pass as a depth
        if isinstance(val, bool) or not isinstance(val, int) or val < 1:
            raise ConfigError(
                f"max_depth must be a positive integer, got {val!r}",
                config_path=config_path,
                option="max_depth",
            )
        config.max_depth = val

    if "command_timeout" in section:
        val = section["command_timeout"]
        if isinstance(val, bool) or not isinstance(val, (int, float)) or val <= 0:
            raise ConfigError(
                f"command_timeout must be a positive number, got {val!r}",
                config_path=config_path,
                option="command_timeout",
            )
        config.command_timeout = float(val)

    return config
