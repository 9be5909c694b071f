"""
Core functionality exports for depflat.

This module provides convenient access to the parsing core and the
workspace collector:

    from depflat.core import DependencyResolver
"""

from __future__ import annotations

from depflat.core.dedup import deduplicate, dedupe_and_sort, sort_by_name
from depflat.core.version_classifier import is_pinned_version
from depflat.core.listing_parser import ListingParser
from depflat.core.tree_flattener import TreeFlattener
from depflat.core.reconciler import (
    ClassificationReconciler,
    DeclaredDependency,
    parse_declared_dependencies,
)
from depflat.core.resolver import DependencyResolver
from depflat.core.collector import DependencyCollector, detect_manifest_type

__all__ = [
    "ClassificationReconciler",
    "DeclaredDependency",
    "DependencyCollector",
    "DependencyResolver",
    "ListingParser",
    "TreeFlattener",
    "dedupe_and_sort",
    "deduplicate",
    "detect_manifest_type",
    "is_pinned_version",
    "parse_declared_dependencies",
    "sort_by_name",
]
