"""Reconciliation of flattened records against a ``package.json`` manifest.

A lockfile says which packages are installed; only the manifest says which
of them the project asked for. :class:`ClassificationReconciler` marks the
records named in the manifest's ``dependencies`` and ``devDependencies`` as
direct and sets their dependency type accordingly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from depflat.models import DependencyType, PackageRecord
from depflat.utils.logger import get_logger

logger = get_logger("reconciler")


@dataclass(frozen=True)
class DeclaredDependency:
    """A dependency named in a manifest.

    Attributes:
        name: Package name as declared.
        version: Text after the first ``:`` of the declared spec
            (``npm:1.2.3`` gives ``1.2.3``), or ``None`` without one.
    """

    name: str
    version: Optional[str] = None


def parse_declared_dependencies(
    declared: Optional[Mapping[str, Any]],
) -> List[DeclaredDependency]:
    """Read a manifest ``dependencies``-style map.

    Versions are informational only: they are never range-checked because
    declared entries are used for name matching, not to build records.

    Args:
        declared: Name to version-spec map, or ``None``.

    Returns:
        Declared dependencies in manifest order. A value that is not a
        mapping is ignored.
    """
    if not declared:
        return []
    if not isinstance(declared, Mapping):
        logger.debug(
            "Ignoring declared dependencies of type %s", type(declared).__name__
        )
        return []

    result: List[DeclaredDependency] = []
    for name, spec in declared.items():
        version: Optional[str] = None
        if isinstance(spec, str):
            _, separator, remainder = spec.partition(":")
            version = remainder if separator else None
        result.append(DeclaredDependency(name=name, version=version))
    return result


class ClassificationReconciler:
    """Sets ``is_transitive`` and ``dependency_type`` from a manifest.

    Runtime dependencies are applied before development dependencies, so
    a name declared in both ends up classified as a development dependency.
    When a name occurs several times in the flattened records, only the
    first occurrence is updated.

    Args:
        logger: Diagnostic sink. Defaults to the ``depflat.reconciler``
            logger.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or get_logger("reconciler")

    def reconcile(
        self,
        records: List[PackageRecord],
        dependencies: Optional[Mapping[str, Any]] = None,
        dev_dependencies: Optional[Mapping[str, Any]] = None,
    ) -> List[PackageRecord]:
        """Classify ``records`` in place.

        Args:
            records: Output of the tree flattener.
            dependencies: Manifest ``dependencies`` map.
            dev_dependencies: Manifest ``devDependencies`` map.

        Returns:
            The same list, for chaining.
        """
        index: Dict[str, PackageRecord] = {}
        for record in records:
            record.is_transitive = True
            index.setdefault(record.name, record)

        self._apply(
            index,
            parse_declared_dependencies(dependencies),
            DependencyType.DEPENDENCY,
        )
        self._apply(
            index,
            parse_declared_dependencies(dev_dependencies),
            DependencyType.DEV_DEPENDENCY,
        )
        return records

    def _apply(
        self,
        index: Mapping[str, PackageRecord],
        declared: Iterable[DeclaredDependency],
        dependency_type: DependencyType,
    ) -> None:
        for entry in declared:
            record = index.get(entry.name)
            if record is None:
                self.logger.debug(
                    "Declared %s %r not found in tree", dependency_type.value, entry.name
                )
                continue

            record.is_transitive = False
            record.dependency_type = dependency_type
