"""Format dispatch for dependency listings.

:class:`DependencyResolver` is the single entry point into the parsing
core. It picks the pipeline matching a manifest selector, runs it, and
always finishes with deduplication and sorting:

- ``yarn.lock`` → tree listing parser (``yarn list`` output)
- ``package-lock.json`` → flat listing parser (``npm list`` output)
- ``npm-shrinkwrap.json`` → tree flattener + manifest reconciliation

The resolver performs no I/O; callers hand it command output or decoded
JSON documents.

Typical usage::

    resolver = DependencyResolver()
    records = resolver.resolve("yarn.lock", output=yarn_list_stdout)
    records = resolver.resolve(
        "npm-shrinkwrap.json", tree=shrinkwrap, manifest=package_json
    )
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from depflat.models import PackageRecord
from depflat.utils.logger import get_logger
from depflat.core.dedup import dedupe_and_sort
from depflat.core.listing_parser import ListingParser
from depflat.core.tree_flattener import TreeFlattener
from depflat.core.reconciler import ClassificationReconciler
from depflat.exceptions import UnsupportedManifestError
from depflat.constants import (
    DEFAULT_MAX_DEPTH,
    NPM_SHRINKWRAP_JSON,
    PACKAGE_LOCK_JSON,
    YARN_LOCK,
)


class DependencyResolver:
    """Produces normalized package records for a given manifest type.

    Args:
        max_depth: Depth guard forwarded to :class:`TreeFlattener`.
        logger: Diagnostic sink shared by all pipeline stages. Defaults to
            per-stage loggers under the ``depflat`` namespace.
    """

    def __init__(
        self,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.logger = logger or get_logger("resolver")
        self.listing_parser = ListingParser(logger=logger)
        self.flattener = TreeFlattener(max_depth=max_depth, logger=logger)
        self.reconciler = ClassificationReconciler(logger=logger)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(
        self,
        manifest_type: str,
        *,
        output: Optional[str] = None,
        tree: Optional[Mapping[str, Any]] = None,
        manifest: Optional[Mapping[str, Any]] = None,
    ) -> List[PackageRecord]:
        """Resolve the records for ``manifest_type``.

        Args:
            manifest_type: One of the supported manifest selectors.
            output: Listing text; required for ``yarn.lock`` and
                ``package-lock.json``.
            tree: Decoded ``npm-shrinkwrap.json``; used for
                ``npm-shrinkwrap.json``.
            manifest: Decoded ``package.json``; used for
                ``npm-shrinkwrap.json``.

        Returns:
            Deduplicated records sorted by name.

        Raises:
            UnsupportedManifestError: ``manifest_type`` is not supported.
            ValueError: A listing selector was given without ``output``.
        """
        if manifest_type in (YARN_LOCK, PACKAGE_LOCK_JSON):
            if output is None:
                raise ValueError(f"{manifest_type} requires listing output")
            return self.resolve_listing(manifest_type, output)

        if manifest_type == NPM_SHRINKWRAP_JSON:
            return self.resolve_tree(tree, manifest)

        raise UnsupportedManifestError(manifest_type)

    def resolve_listing(self, manifest_type: str, output: str) -> List[PackageRecord]:
        """Parse command output for a listing-based manifest type."""
        if manifest_type == YARN_LOCK:
            records = self.listing_parser.parse_tree_listing(output)
        elif manifest_type == PACKAGE_LOCK_JSON:
            records = self.listing_parser.parse_flat_listing(output)
        else:
            raise UnsupportedManifestError(manifest_type)

        result = dedupe_and_sort(records)
        self.logger.debug(
            "Resolved %d unique package(s) from %s listing",
            len(result),
            manifest_type,
        )
        return result

    def resolve_tree(
        self,
        tree: Optional[Mapping[str, Any]],
        manifest: Optional[Mapping[str, Any]] = None,
    ) -> List[PackageRecord]:
        """Flatten a lockfile tree and classify it against a manifest.

        The lockfile's top level describes the project itself, so only its
        ``dependencies`` map is walked. A lockfile without one yields an
        empty list.

        Args:
            tree: Decoded lockfile document, or ``None``.
            manifest: Decoded ``package.json``, or ``None``.

        Returns:
            Deduplicated records sorted by name.
        """
        root = tree.get("dependencies") if tree else None
        records = self.flattener.flatten(root)

        manifest = manifest or {}
        self.reconciler.reconcile(
            records,
            manifest.get("dependencies"),
            manifest.get("devDependencies"),
        )

        result = dedupe_and_sort(records)
        self.logger.debug("Resolved %d unique package(s) from tree", len(result))
        return result
