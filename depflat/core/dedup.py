"""Deduplication and ordering of package records."""

from __future__ import annotations

from typing import Iterable, List, Set

from depflat.models import PackageRecord


def deduplicate(records: Iterable[PackageRecord]) -> List[PackageRecord]:
    """Drop records whose package URL was already seen.

    The first occurrence of each package URL wins; later ones are dropped
    silently.
    """
    seen: Set[str] = set()
    unique: List[PackageRecord] = []

    for record in records:
        purl = record.to_purl()
        if purl in seen:
            continue
        seen.add(purl)
        unique.append(record)

    return unique


def sort_by_name(records: Iterable[PackageRecord]) -> List[PackageRecord]:
    """Sort records by name using ordinal comparison.

    The sort is stable, so records sharing a name keep their relative order.
    """
    return sorted(records, key=lambda record: record.name)


def dedupe_and_sort(records: Iterable[PackageRecord]) -> List[PackageRecord]:
    """Deduplicate by package URL, then sort by name."""
    return sort_by_name(deduplicate(records))
