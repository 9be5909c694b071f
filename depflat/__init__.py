"""
depflat — normalized dependency inventories for npm and Yarn projects

depflat turns the dependency listings produced by JavaScript package
managers into one flat, deduplicated and sorted set of package records,
ready for security and license auditing.

Supported inputs:
    • ``yarn list`` tree output
    • ``npm list`` output (collapsed ``deduped`` entries are skipped)
    • ``npm-shrinkwrap.json`` reconciled against ``package.json``

Every record carries its npm package URL, whether it is a direct or a
transitive dependency, and whether it is a runtime or development
dependency.
"""

from __future__ import annotations

from depflat.__version__ import __version__
from depflat.models import DependencyType, PackageRecord
from depflat.core import DependencyResolver, dedupe_and_sort

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "depflat Contributors"
__license__ = "Apache-2.0"
__description__ = "Flatten npm and Yarn dependency listings into auditable records."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "DependencyResolver",
    "DependencyType",
    "PackageRecord",
    "dedupe_and_sort",
]
