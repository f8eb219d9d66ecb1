"""
Red-black tree core.

This module holds the node representation shared by maps and sets, together
with the structural recursions that do not need any balancing: lookup,
in-order traversal, value mapping, lexicographic comparison and invariant
checking. Nodes are never modified once built; every operation that changes a
tree builds new nodes along one root-to-leaf path and reuses the rest.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterator, Optional, Union

from .ordering import Comparator, default_compare


class Color(Enum):
    """Node color."""

    RED = 0
    BLACK = 1


RED = Color.RED
BLACK = Color.BLACK


class InvariantError(AssertionError):
    """Raised by ``validate`` when a tree breaks a red-black invariant."""
    pass


class Empty:
    """The empty subtree. Only one instance, ``EMPTY``, ever exists."""

    __slots__ = ()

    color = BLACK

    def __repr__(self) -> str:
        return "EMPTY"

    def __bool__(self) -> bool:
        return False


EMPTY = Empty()


class Node:
    """
    A bound node.

    Attributes are assigned once in ``__init__`` and never again: a node may be
    reachable from any number of tree versions at the same time.
    """

    __slots__ = ("color", "left", "key", "value", "right")

    def __init__(self, color: Color, left: Tree, key: Any, value: Any, right: Tree):
        self.color = color
        self.left = left
        self.key = key
        self.value = value
        self.right = right

    def __repr__(self) -> str:
        col = "R" if self.color is RED else "B"
        return f"Node({col}, {self.left!r}, {self.key!r}: {self.value!r}, {self.right!r})"


Tree = Union[Empty, Node]


def is_red(tree: Tree) -> bool:
    """Check if a subtree is a red node."""
    return tree.color is RED


def blacken(tree: Tree) -> Tree:
    """Return ``tree`` with a black root, reusing it when already black."""
    if tree.color is BLACK:
        return tree
    return Node(BLACK, tree.left, tree.key, tree.value, tree.right)


def redden(tree: Node) -> Node:
    """Return ``tree`` (which must be bound) with a red root."""
    if tree.color is RED:
        return tree
    return Node(RED, tree.left, tree.key, tree.value, tree.right)


def find_node(compare: Comparator, key: Any, tree: Tree) -> Optional[Node]:
    """
    Find the node bound to a key.

    Args:
        compare: Key comparator
        key: Key to look for
        tree: Tree to search

    Returns:
        The node holding ``key``, or None if no node does
    """
    node = tree
    while node is not EMPTY:
        c = compare(key, node.key)
        if c == 0:
            return node
        node = node.left if c < 0 else node.right
    return None


def min_node(tree: Tree) -> Optional[Node]:
    """Return the node with the smallest key, or None for an empty tree."""
    if tree is EMPTY:
        return None
    while tree.left is not EMPTY:
        tree = tree.left
    return tree


def max_node(tree: Tree) -> Optional[Node]:
    """Return the node with the largest key, or None for an empty tree."""
    if tree is EMPTY:
        return None
    while tree.right is not EMPTY:
        tree = tree.right
    return tree


def walk(tree: Tree) -> Iterator[Node]:
    """Yield the bound nodes of ``tree`` in ascending key order."""
    stack: list[Node] = []
    node = tree
    while stack or node is not EMPTY:
        while node is not EMPTY:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node
        node = node.right


def count(tree: Tree) -> int:
    """Number of bindings, computed by traversal."""
    return sum(1 for _ in walk(tree))


def fold(fn: Callable[[Any, Any, Any], Any], tree: Tree, init: Any) -> Any:
    """
    Fold over the bindings in ascending key order.

    Computes ``fn(kN, vN, ... fn(k1, v1, init) ...)``.
    """
    acc = init
    for node in walk(tree):
        acc = fn(node.key, node.value, acc)
    return acc


def map_values(fn: Callable[[Any, Any], Any], tree: Tree) -> Tree:
    """
    Replace every value by ``fn(key, value)``.

    The result has exactly the shape and colors of ``tree``; keys are not
    compared. ``fn`` is applied in ascending key order.
    """
    if tree is EMPTY:
        return EMPTY
    left = map_values(fn, tree.left)
    value = fn(tree.key, tree.value)
    right = map_values(fn, tree.right)
    return Node(tree.color, left, tree.key, value, right)


def compare_trees(
    compare: Comparator,
    cmp_values: Callable[[Any, Any], int],
    t1: Tree,
    t2: Tree,
) -> int:
    """
    Lexicographic comparison of the ascending binding sequences of two trees.

    Keys are compared first, then values with ``cmp_values``. A tree that is a
    strict prefix of the other is smaller. The shape of the trees is irrelevant.

    Returns:
        Negative, zero or positive
    """
    others = walk(t2)
    for a in walk(t1):
        b = next(others, None)
        if b is None:
            return 1
        c = compare(a.key, b.key)
        if c != 0:
            return c
        c = cmp_values(a.value, b.value)
        if c != 0:
            return c
    return 0 if next(others, None) is None else -1


def equal_trees(
    compare: Comparator,
    eq_values: Callable[[Any, Any], bool],
    t1: Tree,
    t2: Tree,
) -> bool:
    """Check that two trees hold the same keys bound to equal values."""
    if t1 is t2:
        return True
    others = walk(t2)
    for a in walk(t1):
        b = next(others, None)
        if b is None or compare(a.key, b.key) != 0 or not eq_values(a.value, b.value):
            return False
    return next(others, None) is None


def height(tree: Tree) -> int:
    """Number of nodes on the longest root-to-leaf path."""
    if tree is EMPTY:
        return 0
    return 1 + max(height(tree.left), height(tree.right))


def black_height(tree: Tree) -> int:
    """Number of black nodes on the leftmost path (0 for an empty tree)."""
    n = 0
    while tree is not EMPTY:
        if tree.color is BLACK:
            n += 1
        tree = tree.left
    return n


_UNBOUNDED = object()


def validate(tree: Tree, compare: Comparator = default_compare) -> int:
    """
    Verify the red-black invariants of a whole tree.

    Checks key order, that red nodes have black children, that all paths have
    the same number of black nodes and that the root is black.

    Args:
        tree: Root of the tree
        compare: Comparator the tree was built with

    Returns:
        Black-height of the tree

    Raises:
        InvariantError: On the first violation found
    """
    if tree.color is not BLACK:
        raise InvariantError("Root is not black")
    return _check(tree, compare, _UNBOUNDED, _UNBOUNDED)


def _check(tree: Tree, compare: Comparator, low: Any, high: Any) -> int:
    if tree is EMPTY:
        return 0
    if not isinstance(tree, Node) or not isinstance(tree.color, Color):
        raise InvariantError(f"Malformed subtree {tree!r}")
    if low is not _UNBOUNDED and compare(tree.key, low) <= 0:
        raise InvariantError(f"Key {tree.key!r} is not greater than {low!r}")
    if high is not _UNBOUNDED and compare(tree.key, high) >= 0:
        raise InvariantError(f"Key {tree.key!r} is not less than {high!r}")
    if tree.color is RED and (is_red(tree.left) or is_red(tree.right)):
        raise InvariantError(f"Red node {tree.key!r} has a red child")

    left = _check(tree.left, compare, low, tree.key)
    right = _check(tree.right, compare, tree.key, high)
    if left != right:
        raise InvariantError(
            f"Black-height mismatch below {tree.key!r}: {left} vs {right}"
        )
    return left + (1 if tree.color is BLACK else 0)
