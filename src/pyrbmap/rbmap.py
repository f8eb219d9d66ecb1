"""
Persistent ordered maps.

``RBMap`` is an immutable key -> value map over a red-black tree. Every
"mutating" method returns a new map and leaves the receiver untouched; the two
versions share every subtree the operation did not need to rebuild, so keeping
old versions around is cheap.

Example:
    >>> m = RBMap().insert(3, "c").insert(1, "a")
    >>> m.bindings()
    [(1, 'a'), (3, 'c')]
    >>> m.remove(3).lookup(3) is None
    True
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

from . import bulk, tree
from .delete import remove
from .insert import insert
from .ordering import Comparator, default_compare, same_ordering

K = TypeVar("K")
V = TypeVar("V")
W = TypeVar("W")


class RBMap(Generic[K, V]):
    """
    Immutable map ordered by a comparator.

    The comparator is fixed for the lifetime of a map and inherited by every
    map derived from it.
    """

    __slots__ = ("_compare", "_root")

    def __init__(self, compare: Optional[Comparator] = None, _root: tree.Tree = tree.EMPTY):
        """
        Create a map.

        Args:
            compare: Comparator returning negative, zero, or positive;
                natural ordering when None
        """
        self._compare = compare if compare is not None else default_compare
        self._root = _root

    def _derive(self, root: tree.Tree) -> RBMap:
        if root is self._root:
            return self
        return RBMap(self._compare, root)

    def _aligned(self, other: RBMap) -> tree.Tree:
        """Root of ``other`` ordered by this map's comparator."""
        if same_ordering(self._compare, other._compare, stacklevel=4):
            return other._root
        return bulk.reorder(other._root, self._compare)

    @classmethod
    def empty(cls, compare: Optional[Comparator] = None) -> RBMap:
        """Return the empty map for an ordering."""
        return cls(compare)

    @classmethod
    def singleton(cls, key: K, value: V, compare: Optional[Comparator] = None) -> RBMap:
        """Return a map holding one binding."""
        return cls(compare).insert(key, value)

    @classmethod
    def of_items(cls, items: Iterable[tuple[K, V]], compare: Optional[Comparator] = None) -> RBMap:
        """
        Build a map from ``(key, value)`` pairs.

        Later pairs override earlier ones with an equal key.
        """
        if compare is None:
            compare = default_compare
        return cls(compare, bulk.of_items(items, compare))

    @property
    def compare_keys(self) -> Comparator:
        """The key comparator."""
        return self._compare

    @property
    def root(self) -> tree.Tree:
        """Root node of the underlying tree (read-only)."""
        return self._root

    # Queries

    def is_empty(self) -> bool:
        """Check if the map has no bindings."""
        return self._root is tree.EMPTY

    def member(self, key: K) -> bool:
        """Check if ``key`` is bound."""
        return tree.find_node(self._compare, key, self._root) is not None

    def lookup(self, key: K) -> Optional[V]:
        """
        Get the value bound to ``key``.

        Returns:
            The value, or None if ``key`` is not bound. Use ``find`` or
            ``member`` to tell a missing key from a stored None.
        """
        node = tree.find_node(self._compare, key, self._root)
        return node.value if node is not None else None

    def find(self, key: K) -> V:
        """
        Get the value bound to ``key``.

        Raises:
            KeyError: If ``key`` is not bound
        """
        node = tree.find_node(self._compare, key, self._root)
        if node is None:
            raise KeyError(key)
        return node.value

    def min_binding(self) -> Optional[tuple[K, V]]:
        """Smallest binding, or None for an empty map."""
        node = tree.min_node(self._root)
        return (node.key, node.value) if node is not None else None

    def max_binding(self) -> Optional[tuple[K, V]]:
        """Largest binding, or None for an empty map."""
        node = tree.max_node(self._root)
        return (node.key, node.value) if node is not None else None

    # Updates

    def insert(self, key: K, value: V) -> RBMap:
        """Return a map with ``key`` bound to ``value``, replacing any old binding."""
        return RBMap(self._compare, insert(self._compare, key, value, self._root))

    def remove(self, key: K) -> RBMap:
        """Return a map without a binding for ``key``; ``self`` if it had none."""
        return self._derive(remove(self._compare, key, self._root))

    # Whole-map operations

    @property
    def size(self) -> int:
        """Number of bindings. Linear in the size of the map."""
        return tree.count(self._root)

    def fold(self, fn: Callable[[K, V, Any], Any], init: Any) -> Any:
        """
        Fold over the bindings in ascending key order.

        Args:
            fn: Called as ``fn(key, value, acc)``, returns the new accumulator
            init: Initial accumulator
        """
        return tree.fold(fn, self._root, init)

    def iter(self, fn: Callable[[K, V], None]) -> None:
        """Call ``fn(key, value)`` on every binding in ascending key order."""
        for node in tree.walk(self._root):
            fn(node.key, node.value)

    def map(self, fn: Callable[[V], W]) -> RBMap:
        """Return a map with the same keys and every value replaced by ``fn(value)``."""
        return RBMap(self._compare, tree.map_values(lambda _, value: fn(value), self._root))

    def mapi(self, fn: Callable[[K, V], W]) -> RBMap:
        """Same as ``map``, but ``fn`` also receives the key."""
        return RBMap(self._compare, tree.map_values(fn, self._root))

    def compare(self, cmp: Callable[[V, V], int], other: RBMap) -> int:
        """
        Total ordering between maps.

        Bindings are compared pairwise in ascending key order, keys with the
        map's comparator and values with ``cmp``. A map built under another
        ordering is first re-sorted under this one.

        Returns:
            Negative, zero, or positive
        """
        return tree.compare_trees(self._compare, cmp, self._root, self._aligned(other))

    def equal(self, eq: Callable[[V, V], bool], other: RBMap) -> bool:
        """Check that both maps bind equal keys to values equal under ``eq``."""
        return tree.equal_trees(self._compare, eq, self._root, self._aligned(other))

    def exists(self, pred: Callable[[K, V], bool]) -> bool:
        """Check if some binding satisfies ``pred(key, value)``."""
        return any(pred(node.key, node.value) for node in tree.walk(self._root))

    def for_all(self, pred: Callable[[K, V], bool]) -> bool:
        """Check if every binding satisfies ``pred(key, value)``."""
        return all(pred(node.key, node.value) for node in tree.walk(self._root))

    def filter(self, pred: Callable[[K, V], bool]) -> RBMap:
        """Return the map of the bindings satisfying ``pred(key, value)``."""
        kept = [(node.key, node.value) for node in tree.walk(self._root) if pred(node.key, node.value)]
        return RBMap(self._compare, bulk.build_sorted(kept))

    def bindings(self) -> list[tuple[K, V]]:
        """List of ``(key, value)`` pairs in ascending key order."""
        return [(node.key, node.value) for node in tree.walk(self._root)]

    def keys(self) -> list[K]:
        """List of keys in ascending order."""
        return [node.key for node in tree.walk(self._root)]

    def values(self) -> list[V]:
        """List of values in ascending key order."""
        return [node.value for node in tree.walk(self._root)]

    # Python protocols

    def __contains__(self, key: object) -> bool:
        return self.member(key)

    def __len__(self) -> int:
        return self.size

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __iter__(self) -> Iterator[K]:
        for node in tree.walk(self._root):
            yield node.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RBMap):
            return NotImplemented
        return self.equal(operator.eq, other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self.bindings())
        return f"RBMap({{{items}}})"
