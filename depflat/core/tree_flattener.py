"""Flattening of nested lockfile dependency trees.

``npm-shrinkwrap.json`` (lockfile version 1) nests every package's own
dependencies under it::

    {
      "dependencies": {
        "a": {
          "version": "1.0.0",
          "dependencies": {"b": {"version": "2.0.0", "dev": true}}
        }
      }
    }

:class:`TreeFlattener` walks such a map depth-first and emits one
:class:`PackageRecord` per node, parent before its children, children in
source order. A node whose version is a range rather than a pinned
version is not emitted, but its children are still visited.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from depflat.models import DependencyType, PackageRecord
from depflat.utils.logger import get_logger
from depflat.constants import DEFAULT_MAX_DEPTH
from depflat.core.version_classifier import is_pinned_version


class TreeFlattener:
    """Depth-first flattener for lockfile dependency maps.

    Every emitted record is marked transitive; direct dependencies are
    identified afterwards by
    :class:`~depflat.core.reconciler.ClassificationReconciler`.

    Args:
        max_depth: Deepest nesting level visited. The root map is level 1;
            nodes nested below ``max_depth`` are skipped with a warning.
        logger: Diagnostic sink. Defaults to the ``depflat.tree`` logger.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.max_depth = max_depth
        self.logger = logger or get_logger("tree")

    def flatten(
        self, dependencies: Optional[Mapping[str, Any]]
    ) -> List[PackageRecord]:
        """Flatten a dependency map into a list of records.

        Args:
            dependencies: The root ``dependencies`` map of a lockfile, or
                ``None`` when the project declares no dependencies.

        Returns:
            Records in depth-first discovery order. An absent map yields
            an empty list.
        """
        records: List[PackageRecord] = []
        if dependencies is None:
            self.logger.debug("No dependency tree present")
            return records
        if not isinstance(dependencies, Mapping):
            self.logger.debug(
                "Ignoring dependency tree of type %s", type(dependencies).__name__
            )
            return records

        self._visit(dependencies, depth=1, records=records)
        self.logger.debug("Flattened %d record(s) from tree", len(records))
        return records

    def _visit(
        self,
        dependencies: Mapping[str, Any],
        *,
        depth: int,
        records: List[PackageRecord],
    ) -> None:
        if depth > self.max_depth:
            self.logger.warning(
                "Dependency tree deeper than %d levels; skipping %d nested node(s)",
                self.max_depth,
                len(dependencies),
            )
            return

        for name, node in dependencies.items():
            if not isinstance(node, Mapping):
                self.logger.debug("Skipping malformed node %r", name)
                continue

            version = node.get("version")
            if not name or not version or not isinstance(version, str):
                self.logger.debug("Skipping node %r without a version", name)
                continue

            if is_pinned_version(version):
                records.append(
                    PackageRecord(
                        name=name,
                        version=version,
                        is_transitive=True,
                        dependency_type=DependencyType.from_dev_flag(node.get("dev")),
                    )
                )
            else:
                # children are still installed packages
                self.logger.debug(
                    "Skipping node %r with version range %r", name, version
                )

            children = node.get("dependencies")
            if isinstance(children, Mapping) and children:
                self._visit(children, depth=depth + 1, records=records)
