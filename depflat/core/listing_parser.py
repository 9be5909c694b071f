"""Parsers for line-oriented package-manager listings.

Two listing formats are supported:

- **Tree listing** (``yarn list``): one resolved package per line, drawn
  with tree glyphs, ``name@version`` as the last token::

      yarn list v1.22.19
      ├─ left-pad@1.3.0
      ├─ chalk@^4.0.0
      └─ lodash@4.17.21

- **Flat listing** (``npm list``): same token layout, but packages already
  shown elsewhere in the tree are suffixed with ``deduped``::

      my-app@1.0.0 /srv/my-app
      ├── express@4.18.0
      │ └── debug@4.3.4 deduped

In both formats the first line is a header and contributes nothing.
Range-pinned entries and lines that do not yield both a name and a version
are skipped; a bad line never aborts the parse.

Typical usage::

    parser = ListingParser()
    records = parser.parse_tree_listing(yarn_output)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from depflat.models import PackageRecord
from depflat.utils.logger import get_logger
from depflat.core.version_classifier import is_pinned_version
from depflat.constants import (
    DEDUPED_MARKER,
    ENCODED_SCOPE_MARKER,
    NAME_VERSION_SEPARATOR,
)


class ListingParser:
    """Turns raw listing output into :class:`PackageRecord` objects.

    The parser is stateless; one instance can be reused for any number of
    listings. Diagnostics for skipped lines are emitted at DEBUG level on
    ``logger``.

    Args:
        logger: Diagnostic sink. Defaults to the ``depflat.listing`` logger.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or get_logger("listing")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse_tree_listing(self, output: str) -> List[PackageRecord]:
        """Parse ``yarn list`` style output.

        Args:
            output: Complete multi-line command output.

        Returns:
            Records in listing order; duplicates are not removed here.

        Example::

            >>> parser = ListingParser()
            >>> [str(r) for r in parser.parse_tree_listing(
            ...     "root\\n├─ left-pad@1.3.0\\n├─ chalk@^4.0.0"
            ... )]
            ['left-pad@1.3.0']
        """
        records: List[PackageRecord] = []

        for line_number, candidate in self._candidates(output):
            if not is_pinned_version(candidate):
                self.logger.debug(
                    "Line %d: skipping version range %r", line_number, candidate
                )
                continue

            record = self.parse_candidate(candidate)
            if record is None:
                self.logger.debug(
                    "Line %d: no valid information, skipping %r",
                    line_number,
                    candidate,
                )
                continue
            records.append(record)

        self.logger.debug("Parsed %d record(s) from tree listing", len(records))
        return records

    def parse_flat_listing(self, output: str) -> List[PackageRecord]:
        """Parse ``npm list`` style output.

        Lines ending in ``deduped`` are skipped outright. Every other line
        is split into name and version, and entries whose version is a
        range (for example ``UNMET DEPENDENCY foo@^1.0.0``) are dropped.

        Args:
            output: Complete multi-line command output.

        Returns:
            Records in listing order; duplicates are not removed here.
        """
        records: List[PackageRecord] = []

        for line_number, candidate in self._candidates(output):
            if candidate == DEDUPED_MARKER:
                self.logger.debug("Line %d: skipping deduped entry", line_number)
                continue

            record = self.parse_candidate(candidate)
            if record is None:
                self.logger.debug(
                    "Line %d: no valid information, skipping %r",
                    line_number,
                    candidate,
                )
                continue

            if not is_pinned_version(record.version):
                self.logger.debug(
                    "Line %d: skipping version range %r", line_number, candidate
                )
                continue
            records.append(record)

        self.logger.debug("Parsed %d record(s) from flat listing", len(records))
        return records

    def parse_candidate(self, candidate: str) -> Optional[PackageRecord]:
        """Split a ``name@version`` token into a record.

        A leading ``@`` (scoped package) is encoded before splitting so it
        is not mistaken for the name/version separator, then restored on
        the final name.

        Args:
            candidate: Token such as ``lodash@4.17.21`` or
                ``@babel/core@7.22.0``.

        Returns:
            The record, or ``None`` if name or version is missing.

        Example::

            >>> ListingParser().parse_candidate("@scope/pkg@1.0.0").name
            '@scope/pkg'
        """
        stripped = candidate.strip()
        scoped = stripped.startswith(NAME_VERSION_SEPARATOR)
        parts = _encode_scope(stripped).split(NAME_VERSION_SEPARATOR)

        name = parts[0]
        version = parts[1] if len(parts) > 1 else ""
        if not name or not version:
            return None

        return PackageRecord(
            name=_decode_scope(name) if scoped else name,
            version=version,
        )

    # ------------------------------------------------------------------
    # Helpers (private)
    # ------------------------------------------------------------------

    @staticmethod
    def _candidates(output: str):
        """Yield ``(line_number, last_token)`` for every non-header line."""
        for line_number, line in enumerate(output.splitlines(), start=1):
            if line_number == 1:
                continue

            tokens = line.split()
            if not tokens:
                continue

            yield line_number, tokens[-1]


def _encode_scope(token: str) -> str:
    """Replace a leading scope marker with its encoded form."""
    if token.startswith(NAME_VERSION_SEPARATOR):
        return ENCODED_SCOPE_MARKER + token[1:]
    return token


def _decode_scope(name: str) -> str:
    """Undo :func:`_encode_scope`; only a leading marker is restored."""
    if name.startswith(ENCODED_SCOPE_MARKER):
        return NAME_VERSION_SEPARATOR + name[len(ENCODED_SCOPE_MARKER):]
    return name
