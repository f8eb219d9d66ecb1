"""
Persistent ordered sets.

``RBSet`` runs the same red-black engine as ``RBMap`` with every value fixed to
None. Set algebra (union, intersection, difference) merges the two ascending
element sequences and rebuilds the result in linear time.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from . import bulk, tree
from .delete import remove
from .insert import insert
from .ordering import Comparator, default_compare, same_ordering

T = TypeVar("T")


def _ignore_values(a: None, b: None) -> int:
    return 0


class RBSet(Generic[T]):
    """Immutable set ordered by a comparator."""

    __slots__ = ("_compare", "_root")

    def __init__(self, compare: Optional[Comparator] = None, _root: tree.Tree = tree.EMPTY):
        """
        Create a set.

        Args:
            compare: Comparator returning negative, zero, or positive;
                natural ordering when None
        """
        self._compare = compare if compare is not None else default_compare
        self._root = _root

    def _derive(self, root: tree.Tree) -> RBSet:
        if root is self._root:
            return self
        return RBSet(self._compare, root)

    def _aligned(self, other: RBSet) -> tree.Tree:
        """Root of ``other`` ordered by this set's comparator."""
        if same_ordering(self._compare, other._compare, stacklevel=4):
            return other._root
        return bulk.reorder(other._root, self._compare)

    @classmethod
    def empty(cls, compare: Optional[Comparator] = None) -> RBSet:
        """Return the empty set for an ordering."""
        return cls(compare)

    @classmethod
    def singleton(cls, elem: T, compare: Optional[Comparator] = None) -> RBSet:
        """Return a set holding one element."""
        return cls(compare).insert(elem)

    @classmethod
    def of_iterable(cls, elems: Iterable[T], compare: Optional[Comparator] = None) -> RBSet:
        """Build a set from elements in any order, duplicates allowed."""
        if compare is None:
            compare = default_compare
        return cls(compare, bulk.of_items(((e, None) for e in elems), compare))

    @property
    def compare_keys(self) -> Comparator:
        """The element comparator."""
        return self._compare

    @property
    def root(self) -> tree.Tree:
        """Root node of the underlying tree (read-only)."""
        return self._root

    def is_empty(self) -> bool:
        """Check if the set has no elements."""
        return self._root is tree.EMPTY

    def member(self, elem: T) -> bool:
        """Check if ``elem`` is in the set."""
        return tree.find_node(self._compare, elem, self._root) is not None

    def min_elt(self) -> Optional[T]:
        """Smallest element, or None for an empty set."""
        node = tree.min_node(self._root)
        return node.key if node is not None else None

    def max_elt(self) -> Optional[T]:
        """Largest element, or None for an empty set."""
        node = tree.max_node(self._root)
        return node.key if node is not None else None

    def insert(self, elem: T) -> RBSet:
        """Return a set that also holds ``elem``."""
        return RBSet(self._compare, insert(self._compare, elem, None, self._root))

    def remove(self, elem: T) -> RBSet:
        """Return a set without ``elem``; ``self`` if it was absent."""
        return self._derive(remove(self._compare, elem, self._root))

    @property
    def size(self) -> int:
        """Number of elements. Linear in the size of the set."""
        return tree.count(self._root)

    def fold(self, fn: Callable[[T, Any], Any], init: Any) -> Any:
        """Compute ``fn(xN, ... fn(x1, init) ...)`` over ascending elements."""
        return tree.fold(lambda key, _, acc: fn(key, acc), self._root, init)

    def iter(self, fn: Callable[[T], None]) -> None:
        """Call ``fn`` on every element in ascending order."""
        for node in tree.walk(self._root):
            fn(node.key)

    def compare(self, other: RBSet) -> int:
        """Lexicographic ordering of the ascending element sequences."""
        return tree.compare_trees(self._compare, _ignore_values, self._root, self._aligned(other))

    def equal(self, other: RBSet) -> bool:
        """Check that both sets hold the same elements."""
        return tree.equal_trees(self._compare, lambda a, b: True, self._root, self._aligned(other))

    def exists(self, pred: Callable[[T], bool]) -> bool:
        """Check if some element satisfies ``pred``."""
        return any(pred(node.key) for node in tree.walk(self._root))

    def for_all(self, pred: Callable[[T], bool]) -> bool:
        """Check if every element satisfies ``pred``."""
        return all(pred(node.key) for node in tree.walk(self._root))

    def filter(self, pred: Callable[[T], bool]) -> RBSet:
        """Return the set of elements satisfying ``pred``."""
        kept = [(node.key, None) for node in tree.walk(self._root) if pred(node.key)]
        return RBSet(self._compare, bulk.build_sorted(kept))

    def elements(self) -> list[T]:
        """List of elements in ascending order."""
        return [node.key for node in tree.walk(self._root)]

    # Set algebra

    def _merge(self, other_root: tree.Tree, left_only: bool, both: bool, right_only: bool) -> RBSet:
        """
        Walk both sets in step and keep elements by where they occur.

        Elements found in both sets are taken from ``self``.
        """
        compare = self._compare
        kept: list[tuple[T, None]] = []
        mine = tree.walk(self._root)
        theirs = tree.walk(other_root)
        a = next(mine, None)
        b = next(theirs, None)
        while a is not None and b is not None:
            c = compare(a.key, b.key)
            if c < 0:
                if left_only:
                    kept.append((a.key, None))
                a = next(mine, None)
            elif c > 0:
                if right_only:
                    kept.append((b.key, None))
                b = next(theirs, None)
            else:
                if both:
                    kept.append((a.key, None))
                a = next(mine, None)
                b = next(theirs, None)
        while left_only and a is not None:
            kept.append((a.key, None))
            a = next(mine, None)
        while right_only and b is not None:
            kept.append((b.key, None))
            b = next(theirs, None)
        return RBSet(compare, bulk.build_sorted(kept))

    def union(self, other: RBSet) -> RBSet:
        """Elements of either set."""
        theirs = self._aligned(other)
        if theirs is tree.EMPTY:
            return self
        return self._merge(theirs, True, True, True)

    def inter(self, other: RBSet) -> RBSet:
        """Elements of both sets."""
        return self._merge(self._aligned(other), False, True, False)

    def diff(self, other: RBSet) -> RBSet:
        """Elements of ``self`` that are not in ``other``."""
        theirs = self._aligned(other)
        if theirs is tree.EMPTY:
            return self
        return self._merge(theirs, True, False, False)

    def subset(self, other: RBSet) -> bool:
        """Check if every element of ``self`` is in ``other``."""
        theirs = self._aligned(other)
        return all(
            tree.find_node(self._compare, node.key, theirs) is not None
            for node in tree.walk(self._root)
        )

    # Python protocols

    def __contains__(self, elem: object) -> bool:
        return self.member(elem)

    def __len__(self) -> int:
        return self.size

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __iter__(self) -> Iterator[T]:
        for node in tree.walk(self._root):
            yield node.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RBSet):
            return NotImplemented
        return self.equal(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"RBSet({self.elements()!r})"
