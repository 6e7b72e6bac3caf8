"""Dot-segment version string ordering.

Version strings are split on ``.`` and compared section by section:

- numeric sections (ASCII digits only, leading zeros allowed) compare as
  integers;
- any other section, including the empty string, compares as a plain string;
- a numeric section always sorts before a non-numeric one;
- when one string is a prefix of the other, the shorter one sorts first.

Examples::

    1.1 < 1.1.2 < 1.2.1 < 1.2.2 < 1.5 < 1.12 < 1.13 < 1.1-beta < 1.1beta

This is not semantic versioning; there is no pre-release or build metadata
handling.
"""

import re
from functools import cmp_to_key
from typing import Optional

_NUMERIC = re.compile(r"[0-9]+")


def _as_digits(section: str) -> Optional[str]:
    """Return the section without leading zeros if it is numeric, else None."""
    if _NUMERIC.fullmatch(section):
        return section.lstrip("0")
    return None


def _cmp_digits(a: str, b: str) -> int:
    # no leading zeros: the longer digit string is the larger number
    return _cmp(len(a), len(b)) or _cmp(a, b)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_versions(first: str, second: str) -> int:
    """Compare two version strings.

    Returns:
        A negative int, zero, or a positive int as ``first`` sorts before,
        equal to, or after ``second``.

    Raises:
        TypeError: if either argument is not a string.
    """
    if not isinstance(first, str) or not isinstance(second, str):
        raise TypeError("version strings must not be None")
    first_sections = first.split(".")
    second_sections = second.split(".")
    for a, b in zip(first_sections, second_sections):
        a_num = _as_digits(a)
        b_num = _as_digits(b)
        if a_num is not None and b_num is not None:
            result = _cmp_digits(a_num, b_num)
        elif a_num is not None:
            result = -1
        elif b_num is not None:
            result = 1
        else:
            result = _cmp(a, b)
        if result:
            return result
    return _cmp(len(first_sections), len(second_sections))


version_key = cmp_to_key(compare_versions)


def sorted_unique(items, key):
    """Sort ``items`` by ``key`` and drop entries that compare equal.

    Mirrors sorted-set insertion: among items with equal keys, the first one
    seen is kept.
    """
    result = []
    last_key = None
    for item in sorted(items, key=key):
        item_key = key(item)
        if result and item_key == last_key:
            continue
        result.append(item)
        last_key = item_key
    return result
