"""
Pinned-version detection.

Package-manager listings mix exact versions (``4.17.21``) with unresolved
constraints (``^4.0.0``, ``>=1.2 <2``). Only exact versions identify a
package, so every other token is rejected before a record is built.
"""

from __future__ import annotations

from depflat.constants import RANGE_OPERATORS


def is_pinned_version(token: str) -> bool:
    """Return True if ``token`` carries no comparator or range operator.

    Args:
        token: Raw version token, or a whole ``name@version`` token.

    Returns:
        ``False`` for empty tokens and for tokens containing any of
        ``^ ~ >= <= > <``; ``True`` otherwise.

    Examples:
        >>> is_pinned_version("1.3.0")
        True
        >>> is_pinned_version("chalk@^4.0.0")
        False
    """
    if not token:
        return False
    return not any(operator in token for operator in RANGE_OPERATORS)
