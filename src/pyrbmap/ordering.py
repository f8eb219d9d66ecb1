"""
Key orderings for red-black maps and sets.

A comparator is a two-argument function returning a negative number, zero or
a positive number when the first key is smaller than, equal to or greater than
the second one. The library trusts the comparator to be a strict total order
and never checks it.
"""

from __future__ import annotations

from typing import Any, Callable
import warnings

Comparator = Callable[[Any, Any], int]


class OrderingWarning(UserWarning):
    """Warning about trees combined under different key orderings."""
    pass


def default_compare(a: Any, b: Any) -> int:
    """Natural ordering of keys using ``<`` and ``>``."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def reverse(compare: Comparator) -> Comparator:
    """
    Invert a comparator.

    Args:
        compare: Comparator to invert

    Returns:
        Comparator ordering keys in descending order of ``compare``
    """
    def reversed_compare(a: Any, b: Any) -> int:
        return compare(b, a)

    return reversed_compare


def by_key(fn: Callable[[Any], Any], compare: Comparator = default_compare) -> Comparator:
    """
    Order keys by a projection of themselves.

    Args:
        fn: Projection applied to both keys before comparison
        compare: Comparator for the projected values

    Returns:
        Comparator over the original keys
    """
    def projected_compare(a: Any, b: Any) -> int:
        return compare(fn(a), fn(b))

    return projected_compare


def same_ordering(a: Comparator, b: Comparator, stacklevel: int = 3) -> bool:
    """
    Check that two trees can be combined without reordering.

    Comparators are compared by identity; two equivalent but distinct functions
    are treated as different orderings and trigger an ``OrderingWarning``.

    Returns:
        True if both comparators are the same object
    """
    if a is b:
        return True
    warnings.warn(
        "Combining trees built with different comparators; "
        "the receiver's ordering is used for both.",
        OrderingWarning,
        stacklevel=stacklevel
    )
    return False
