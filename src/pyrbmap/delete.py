"""
Pure red-black deletion.

Removing a black leaf leaves every path through it one black node short. The
recursion reports this back to the parent as a deficient ``Unwind`` result and
each parent either repairs it locally, by rotating and recoloring around the
sibling, or passes it one level further up. A deficiency that reaches the root
is simply dropped: the whole tree then has a black-height one smaller.

Sibling cases for a deficient left child (the right side is the mirror image):

1. Sibling red: rotate the sibling up, recurse into the new black sibling
   below a red parent, which always resolves.
2. Sibling black, far child red: single rotation, resolved.
3. Sibling black, near child red: double rotation, resolved.
4. Sibling black, both children black: recolor the sibling red. A red parent
   turns black and absorbs the deficiency, a black parent passes it up.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from .ordering import Comparator
from .tree import BLACK, EMPTY, RED, Color, Node, Tree, blacken, redden


class Unwind(NamedTuple):
    """Result of deleting from a subtree."""

    tree: Tree
    deficient: bool


def _fix_left(color: Color, left: Tree, key: Any, value: Any, right: Node) -> Unwind:
    """Rebuild a node whose left subtree is one black node short."""
    if right.color is RED:
        inner = _fix_left(RED, left, key, value, right.left)
        return Unwind(Node(BLACK, inner.tree, right.key, right.value, right.right), False)
    if right.right.color is RED:
        far = right.right
        return Unwind(
            Node(
                color,
                Node(BLACK, left, key, value, right.left),
                right.key, right.value,
                Node(BLACK, far.left, far.key, far.value, far.right),
            ),
            False,
        )
    if right.left.color is RED:
        near = right.left
        return Unwind(
            Node(
                color,
                Node(BLACK, left, key, value, near.left),
                near.key, near.value,
                Node(BLACK, near.right, right.key, right.value, right.right),
            ),
            False,
        )
    return Unwind(Node(BLACK, left, key, value, redden(right)), color is BLACK)


def _fix_right(color: Color, left: Node, key: Any, value: Any, right: Tree) -> Unwind:
    """Rebuild a node whose right subtree is one black node short."""
    if left.color is RED:
        inner = _fix_right(RED, left.right, key, value, right)
        return Unwind(Node(BLACK, left.left, left.key, left.value, inner.tree), False)
    if left.left.color is RED:
        far = left.left
        return Unwind(
            Node(
                color,
                Node(BLACK, far.left, far.key, far.value, far.right),
                left.key, left.value,
                Node(BLACK, left.right, key, value, right),
            ),
            False,
        )
    if left.right.color is RED:
        near = left.right
        return Unwind(
            Node(
                color,
                Node(BLACK, left.left, left.key, left.value, near.left),
                near.key, near.value,
                Node(BLACK, near.right, key, value, right),
            ),
            False,
        )
    return Unwind(Node(BLACK, redden(left), key, value, right), color is BLACK)


def _splice(node: Node) -> Unwind:
    """Remove a node that has at most one bound child."""
    child = node.left if node.left is not EMPTY else node.right
    if child is EMPTY:
        return Unwind(EMPTY, node.color is BLACK)
    # The lone child of a valid node is a red leaf.
    return Unwind(blacken(child), node.color is BLACK and child.color is BLACK)


def _with_left(node: Node, result: Unwind) -> Unwind:
    if result.deficient:
        return _fix_left(node.color, result.tree, node.key, node.value, node.right)
    return Unwind(Node(node.color, result.tree, node.key, node.value, node.right), False)


def _with_right(node: Node, result: Unwind) -> Unwind:
    if result.deficient:
        return _fix_right(node.color, node.left, node.key, node.value, result.tree)
    return Unwind(Node(node.color, node.left, node.key, node.value, result.tree), False)


def remove_min(tree: Node) -> tuple[Any, Any, Unwind]:
    """
    Remove the smallest binding of a non-empty tree.

    Keys are not compared, so this is safe to use while deleting under a
    comparator that would not find the minimum again.

    Returns:
        The removed key, the removed value and the unwind result
    """
    if tree.left is EMPTY:
        return tree.key, tree.value, _splice(tree)
    key, value, result = remove_min(tree.left)
    return key, value, _with_left(tree, result)


def _delete(compare: Comparator, key: Any, tree: Tree) -> Unwind:
    if tree is EMPTY:
        return Unwind(EMPTY, False)
    c = compare(key, tree.key)
    if c < 0:
        result = _delete(compare, key, tree.left)
        if result.tree is tree.left:
            return Unwind(tree, False)
        return _with_left(tree, result)
    if c > 0:
        result = _delete(compare, key, tree.right)
        if result.tree is tree.right:
            return Unwind(tree, False)
        return _with_right(tree, result)
    if tree.left is EMPTY or tree.right is EMPTY:
        return _splice(tree)
    succ_key, succ_value, result = remove_min(tree.right)
    if result.deficient:
        return _fix_right(tree.color, tree.left, succ_key, succ_value, result.tree)
    return Unwind(Node(tree.color, tree.left, succ_key, succ_value, result.tree), False)


def remove(compare: Comparator, key: Any, tree: Tree) -> Tree:
    """
    Remove the binding of a key.

    Args:
        compare: Key comparator
        key: Key to unbind
        tree: Valid red-black tree

    Returns:
        New tree root, or ``tree`` itself if ``key`` is not bound
    """
    result = _delete(compare, key, tree)
    if result.tree is tree:
        return tree
    return blacken(result.tree)
