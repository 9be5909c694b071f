"""
Package record data model for depflat.

This module defines the normalized representation of one resolved npm
package: its identity (name and pinned version), an optional integrity
hash, and the classification metadata used by audits (direct versus
transitive, runtime versus development dependency).
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict

from depflat.constants import (
    ENCODED_SCOPE_MARKER,
    NAME_VERSION_SEPARATOR,
    PURL_PREFIX,
)


class DependencyType(str, Enum):
    """Whether a package is needed at runtime or only for development."""

    DEPENDENCY = "dependency"
    DEV_DEPENDENCY = "devDependency"

    @classmethod
    def from_dev_flag(cls, dev: Any) -> "DependencyType":
        """Map a lockfile ``dev`` marker onto a dependency type."""
        return cls.DEV_DEPENDENCY if dev else cls.DEPENDENCY


@dataclass
class PackageRecord:
    """
    A single resolved package.

    Attributes:
        name: Package name; scoped names keep their leading ``@``.
        version: Pinned version string.
        hash: Integrity hash, empty when unknown.
        is_transitive: ``False`` only for direct dependencies of the project.
        dependency_type: Runtime or development classification.
    """

    name: str
    version: str
    hash: str = ""
    is_transitive: bool = True
    dependency_type: DependencyType = DependencyType.DEPENDENCY

    def __post_init__(self) -> None:
        """Reject records without a complete identity."""
        if not self.name:
            raise ValueError("Package name must not be empty")
        if not self.version:
            raise ValueError(f"Package {self.name!r} has no version")
        self.dependency_type = DependencyType(self.dependency_type)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def to_purl(self) -> str:
        """
        Return the npm package URL identifying this package.

        The leading ``@`` of a scoped name is percent-encoded, so
        ``@scope/pkg`` at ``1.0.0`` becomes ``pkg:npm/%40scope/pkg@1.0.0``.

        Returns:
            Canonical identifier built from name and version.
        """
        name = self.name
        if name.startswith(NAME_VERSION_SEPARATOR):
            name = ENCODED_SCOPE_MARKER + name[1:]
        return f"{PURL_PREFIX}{name}{NAME_VERSION_SEPARATOR}{self.version}"

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    @property
    def is_direct(self) -> bool:
        """True if the project declares this package itself."""
        return not self.is_transitive

    @property
    def is_dev(self) -> bool:
        """True if this is a development-only dependency."""
        return self.dependency_type is DependencyType.DEV_DEPENDENCY

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize the record to a JSON-compatible dictionary.

        Returns:
            JSON-safe package representation.
        """
        return {
            "name": self.name,
            "version": self.version,
            "hash": self.hash,
            "purl": self.to_purl(),
            "is_transitive": self.is_transitive,
            "dependency_type": self.dependency_type.value,
        }

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        """Return ``name@version``."""
        return f"{self.name}{NAME_VERSION_SEPARATOR}{self.version}"
