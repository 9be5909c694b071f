"""
Custom exception hierarchy for depflat.

This module defines structured exception types used across depflat.
All exceptions inherit from :class:`DepFlatError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class DepFlatError(Exception):
    """Base exception for all depflat errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class UnsupportedManifestError(DepFlatError):
    """Raised when a manifest type has no parser or command behind it.

    Args:
        manifest_type: The selector that was requested.
        message: Optional override for the default message.
    """

    __slots__ = ("manifest_type",)

    def __init__(
        self,
        manifest_type: Optional[str],
        *,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(
            message
            or (
                "No valid command supplied, have you implemented it? "
                f"Manifest type supplied: {manifest_type}"
            ),
            {"manifest_type": manifest_type},
        )
        self.manifest_type = manifest_type


class CommandError(DepFlatError):
    """Raised when an external package-manager command fails.

    Args:
        message: Error description.
        command: Command line that was executed.
        returncode: Process exit status, if the process ran.
        stderr: Captured standard error, truncated in ``details``.
    """

    __slots__ = ("command", "returncode", "stderr")

    def __init__(
        self,
        message: str,
        *,
        command: Optional[str] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "command", command)
        _add_if(details, "returncode", returncode)

        if stderr:
            details["stderr"] = _truncate(stderr.strip())

        super().__init__(message, details)

        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class FileOperationError(DepFlatError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/decode).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigError(DepFlatError):
    """Raised when a configuration file is invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "config", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option
