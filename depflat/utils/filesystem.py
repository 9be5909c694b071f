"""
Filesystem utilities for depflat.

Safe helpers for reading the lockfiles and manifests handed to the
dependency resolver. All filesystem and decoding errors are normalized
to ``FileOperationError``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from depflat.utils.logger import get_logger
from depflat.constants import MAX_FILE_SIZE
from depflat.exceptions import FileOperationError


logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Validate that ``path`` is an existing file and resolve it."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Safely read a text file with optional size limits.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding.

    Returns:
        File contents as a string.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except Exception as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def read_json_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
) -> Dict[str, Any]:
    """Read a file holding a single JSON object.

    Args:
        file_path: Path to the JSON document (lockfile or manifest).
        max_size: Maximum allowed file size in bytes (None disables limit).

    Returns:
        The decoded top-level object.

    Raises:
        FileOperationError: The file cannot be read, is not valid JSON,
            or its top level is not an object.
    """
    content = safe_read_file(file_path, max_size=max_size)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise FileOperationError(
            f"Invalid JSON: {exc}",
            file_path=str(file_path),
            operation="decode",
            original_error=exc,
        ) from exc

    if not isinstance(data, dict):
        raise FileOperationError(
            f"Expected a JSON object, got {type(data).__name__}",
            file_path=str(file_path),
            operation="decode",
        )

    logger.debug("Loaded JSON document: %s", file_path)
    return data
