"""
pyrbmap: Persistent red-black maps and sets

Immutable ordered containers over a caller-supplied key ordering, after
Okasaki's "Red-Black Trees in a Functional Setting".
"""

__version__ = "0.1.0"

from .ordering import OrderingWarning, by_key, default_compare, reverse
from .rbmap import RBMap
from .rbset import RBSet
from .tree import InvariantError

__all__ = [
    "RBMap",
    "RBSet",
    "default_compare",
    "reverse",
    "by_key",
    "OrderingWarning",
    "InvariantError",
]
