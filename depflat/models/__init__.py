"""
Unified data model exports for depflat.

Example:
    >>> from depflat.models import PackageRecord, DependencyType
"""

from __future__ import annotations

from depflat.models.package import DependencyType, PackageRecord

__all__ = [
    "DependencyType",
    "PackageRecord",
]
