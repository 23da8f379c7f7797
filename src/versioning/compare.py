"""Version ordering shared by every source.

Versions are treated as plain sequences of numbers: any run of non-digit
characters is a separator, so "1.2.3", "v1.2.3" and "1.2.3-beta" all compare
as (1, 2, 3). No semver structure is assumed, which keeps the comparison
meaningful across registries that disagree on version syntax.
"""

from __future__ import annotations

import re
from itertools import zip_longest
from typing import Iterable, List, Optional, TypeVar

_NON_DIGITS = re.compile(r"[^0-9]+")

T = TypeVar("T")


def numeric_parts(version: Optional[str]) -> List[int]:
    """Return the numeric components of ``version`` in order."""
    if not version:
        return []
    # ASCII digits only; str.isdigit() would accept superscripts int() rejects
    return [int(token) for token in _NON_DIGITS.split(str(version)) if token]


def is_newer(installed: Optional[str], candidate: Optional[str]) -> bool:
    """Return True if ``candidate`` is strictly newer than ``installed``.

    Missing components count as 0, so "1.0" and "1.0.0" are equal. Inputs
    without digits compare equal to each other and never raise.
    """
    for current, other in zip_longest(numeric_parts(installed), numeric_parts(candidate), fillvalue=0):
        if other > current:
            return True
        if other < current:
            return False
    return False


def pick_newest(candidates: Iterable[T], key=lambda item: item) -> Optional[T]:
    """Return the newest candidate, keeping the first one seen on ties.

    Args:
        candidates: Items to reduce.
        key: Maps an item to its version string.

    Returns:
        The newest item, or None when ``candidates`` is empty.
    """
    best: Optional[T] = None
    for item in candidates:
        if best is None or is_newer(key(best), key(item)):
            best = item
    return best
