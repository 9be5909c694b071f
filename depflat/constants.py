"""
Centralized constants for depflat.

This module defines immutable configuration values used across depflat,
including manifest selectors, package-manager commands, listing markers,
and logging formats. All values are intended to be treated as read-only.
"""

from typing import Final, Mapping, Sequence

# ---------------------------------------------------------------------------
# Manifest selectors
# ---------------------------------------------------------------------------

#: Yarn projects, resolved through ``yarn list``.
YARN_LOCK: Final[str] = "yarn.lock"

#: npm projects with a shrinkwrap file, resolved from the lockfile tree.
NPM_SHRINKWRAP_JSON: Final[str] = "npm-shrinkwrap.json"

#: npm projects with a package lock, resolved through ``npm list``.
PACKAGE_LOCK_JSON: Final[str] = "package-lock.json"

#: Hand-authored npm manifest holding the declared dependencies.
PACKAGE_JSON: Final[str] = "package.json"

#: Selector value asking depflat to pick the manifest type itself.
AUTO_MANIFEST_TYPE: Final[str] = "auto"

#: Supported manifest selectors, in auto-detection priority order.
SUPPORTED_MANIFEST_TYPES: Final[Sequence[str]] = (
    YARN_LOCK,
    NPM_SHRINKWRAP_JSON,
    PACKAGE_LOCK_JSON,
)

# ---------------------------------------------------------------------------
# Package-manager commands
# ---------------------------------------------------------------------------

YARN_LIST_COMMAND: Final[str] = "yarn list"
NPM_LIST_COMMAND: Final[str] = "npm list"
NPM_SHRINKWRAP_COMMAND: Final[str] = "npm shrinkwrap"

#: Command executed for each manifest selector.
MANIFEST_COMMANDS: Final[Mapping[str, str]] = {
    YARN_LOCK: YARN_LIST_COMMAND,
    NPM_SHRINKWRAP_JSON: NPM_SHRINKWRAP_COMMAND,
    PACKAGE_LOCK_JSON: NPM_LIST_COMMAND,
}

# ---------------------------------------------------------------------------
# Listing format markers
# ---------------------------------------------------------------------------

#: Comparator and range operators that disqualify a version from being pinned.
RANGE_OPERATORS: Final[Sequence[str]] = ("^", "~", ">=", "<=", ">", "<")

#: Trailing marker of an ``npm list`` entry collapsed into an earlier one.
DEDUPED_MARKER: Final[str] = "deduped"

#: Separator between package name and version in listing tokens.
NAME_VERSION_SEPARATOR: Final[str] = "@"

#: Temporary stand-in for the leading ``@`` of a scoped package name.
ENCODED_SCOPE_MARKER: Final[str] = "%40"

#: Package URL type prefix for npm packages.
PURL_PREFIX: Final[str] = "pkg:npm/"

# ---------------------------------------------------------------------------
# Processing limits
# ---------------------------------------------------------------------------

#: Default maximum nesting depth followed when flattening a lockfile tree.
DEFAULT_MAX_DEPTH: Final[int] = 64

#: Whether development dependencies are reported by default.
DEFAULT_INCLUDE_DEV: Final[bool] = True

#: Maximum allowed file size (in bytes) when reading lockfiles and manifests.
MAX_FILE_SIZE: Final[int] = 50 * 1024 * 1024  # 50 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
