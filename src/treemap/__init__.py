from .comparators import KeyKind, resolve_comparator
from .exceptions import (
    OrderInvariantError,
    TreeMapException,
    UnresolvableOrderingError,
)
from .structures import TreeMap

__all__ = [
    "KeyKind",
    "OrderInvariantError",
    "resolve_comparator",
    "TreeMap",
    "TreeMapException",
    "UnresolvableOrderingError",
]
