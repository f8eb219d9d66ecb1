"""
Pure red-black insertion.

Okasaki's scheme: insert the new binding as a red leaf, then on the way back
up rewrite every black node that has a red child with a red grandchild into a
red node with two black children. The root is painted black at the end, which
is the only step that grows the black-height of the whole tree.
"""

from __future__ import annotations

from typing import Any

from .ordering import Comparator
from .tree import BLACK, EMPTY, RED, Color, Node, Tree, blacken


def balance(color: Color, left: Tree, key: Any, value: Any, right: Tree) -> Node:
    """
    Build a node, repairing a red-red violation directly below it.

    When ``color`` is black and one child is red with a red child of its own,
    the three nodes are rotated into a red node with two black children. The
    four cases differ only in where the red grandchild sits; the subtrees
    ``a``, ``b``, ``c`` and ``d`` are reused as is.
    """
    if color is BLACK:
        if left.color is RED:
            if left.left.color is RED:
                # left-left
                ll = left.left
                return Node(
                    RED,
                    Node(BLACK, ll.left, ll.key, ll.value, ll.right),
                    left.key, left.value,
                    Node(BLACK, left.right, key, value, right),
                )
            if left.right.color is RED:
                # left-right
                lr = left.right
                return Node(
                    RED,
                    Node(BLACK, left.left, left.key, left.value, lr.left),
                    lr.key, lr.value,
                    Node(BLACK, lr.right, key, value, right),
                )
        if right.color is RED:
            if right.left.color is RED:
                # right-left
                rl = right.left
                return Node(
                    RED,
                    Node(BLACK, left, key, value, rl.left),
                    rl.key, rl.value,
                    Node(BLACK, rl.right, right.key, right.value, right.right),
                )
            if right.right.color is RED:
                # right-right
                rr = right.right
                return Node(
                    RED,
                    Node(BLACK, left, key, value, right.left),
                    right.key, right.value,
                    Node(BLACK, rr.left, rr.key, rr.value, rr.right),
                )
    return Node(color, left, key, value, right)


def insert(compare: Comparator, key: Any, value: Any, tree: Tree) -> Tree:
    """
    Insert a binding.

    Args:
        compare: Key comparator
        key: Key to bind
        value: Value to bind it to; replaces any previous value of ``key``
        tree: Valid red-black tree

    Returns:
        New tree root; ``tree`` is left untouched
    """
    def ins(node: Tree) -> Node:
        if node is EMPTY:
            return Node(RED, EMPTY, key, value, EMPTY)
        c = compare(key, node.key)
        if c < 0:
            return balance(node.color, ins(node.left), node.key, node.value, node.right)
        if c > 0:
            return balance(node.color, node.left, node.key, node.value, ins(node.right))
        return Node(node.color, node.left, key, value, node.right)

    return blacken(ins(tree))
