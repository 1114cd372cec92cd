from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from collections.abc import ItemsView, Iterator, Mapping, MutableMapping, ValuesView
from functools import cmp_to_key
from typing import Self

from treemap.comparators import compare_none, resolve_comparator
from treemap.config import settings
from treemap.exceptions import OrderInvariantError
from treemap.typings import Comparator

__author__ = "xbhel"
__email__ = "xbhel@outlook.com"


logger = logging.getLogger(__name__)
logger.setLevel(settings.log_level)


class TreeMap[KT, VT](MutableMapping[KT, VT]):
    """
    A mutable mapping that keeps its keys sorted and supports
    floor/ceiling/lower/higher navigation.

    Entries live in a plain dict; a separate list holds the same keys sorted
    by the comparator and is rebuilt on every mutation. Without an explicit
    comparator the ordering is picked from the type of the first key inserted
    (number, string, int or date/time) and kept for the life of the map.

    Example::

        tm = TreeMap[int, str]()
        tm.set(20, "e").set(0, "a").set(10, "c")
        list(tm)  # [0, 10, 20]
        tm.floor_key(15)  # 10
        tm.ceiling_entry(15)  # (20, "e")
        tm.lower_key(0)  # None
        tm.pop_entry()  # (20, "e")
    """

    __slots__ = ("_data", "_sorted_keys", "_comparator", "_sort_key", "_resolved")

    def __init__(self, comparator: Comparator[KT] | None = None) -> None:
        """
        Args:
            comparator:
                A function returning a negative, zero or positive int when its
                first argument sorts before, equal to or after the second.
                Resolved from the first key inserted when omitted.
        """
        self._data: dict[KT, VT] = {}
        self._sorted_keys: list[KT] = []
        self._resolved = comparator is not None
        self._use_comparator(compare_none if comparator is None else comparator)

    @classmethod
    def from_map(
        cls, mapping: Mapping[KT, VT], comparator: Comparator[KT] | None = None
    ) -> Self:
        """Create a new TreeMap holding the entries of the given mapping."""
        tree_map = cls(comparator)
        tree_map.set_all(mapping)
        return tree_map

    @property
    def comparator(self) -> Comparator[KT]:
        return self._comparator

    def duplicate(self) -> Self:
        """Return an independent TreeMap with the same comparator and entries."""
        return self.from_map(self, self._comparator if self._resolved else None)

    def copy(self) -> Self:
        return self.duplicate()

    def to_dict(self) -> dict[KT, VT]:
        """Return the entries as a new dict whose iteration order is the key order."""
        return {key: self._data[key] for key in self._sorted_keys}

    def set(self, key: KT, value: VT) -> Self:
        """
        Add or update the entry for ``key``.

        Raises:
            UnresolvableOrderingError: If this is the first key, no comparator
                was given and the key type has no built-in ordering. The map
                is left unchanged.
        """
        if not self._resolved:
            self._use_comparator(resolve_comparator(key))
            self._resolved = True
            logger.debug("Key order of %s fixed by first key %r", self._name, key)

        existed = key in self._data
        previous = self._data.get(key)
        self._data[key] = value
        try:
            self._sorted_keys = sorted(self._data, key=self._sort_key)
        except BaseException:
            # the comparator rejected the key; undo the write
            if existed:
                self._data[key] = previous  # type: ignore[assignment]
            else:
                del self._data[key]
            raise

        self._verify_order()
        return self

    def set_all(self, mapping: Mapping[KT, VT]) -> Self:
        for key, value in mapping.items():
            self.set(key, value)
        return self

    def delete(self, key: KT) -> bool:
        """Remove the entry for ``key``; return False if there was none."""
        if key not in self._data:
            return False

        del self._data[key]
        compare = self._comparator
        self._sorted_keys = [
            existing
            for existing in self._sorted_keys
            if compare(existing, key) != 0 or existing in self._data
        ]
        self._verify_order()
        return True

    def clear(self) -> None:
        self._data.clear()
        self._sorted_keys = []

    def first_key(self) -> KT | None:
        return self._key_at(0)

    def first_entry(self) -> tuple[KT, VT] | None:
        return self._entry_at(0)

    def last_key(self) -> KT | None:
        return self._key_at(len(self._sorted_keys) - 1)

    def last_entry(self) -> tuple[KT, VT] | None:
        return self._entry_at(len(self._sorted_keys) - 1)

    def shift_entry(self) -> tuple[KT, VT] | None:
        """Remove and return the first entry, or None if the map is empty."""
        entry = self.first_entry()
        if entry is not None:
            self.delete(entry[0])
        return entry

    def pop_entry(self) -> tuple[KT, VT] | None:
        """Remove and return the last entry, or None if the map is empty."""
        entry = self.last_entry()
        if entry is not None:
            self.delete(entry[0])
        return entry

    def floor_key(self, key: KT) -> KT | None:
        """
        Returns the greatest key <= the given key,
        or None if there is no such key.
        """
        return self._key_at(self._bisect_right(key) - 1)

    def floor_entry(self, key: KT) -> tuple[KT, VT] | None:
        return self._entry_at(self._bisect_right(key) - 1)

    def ceiling_key(self, key: KT) -> KT | None:
        """
        Returns the smallest key >= the given key,
        or None if there is no such key.
        """
        return self._key_at(self._bisect_left(key))

    def ceiling_entry(self, key: KT) -> tuple[KT, VT] | None:
        return self._entry_at(self._bisect_left(key))

    def lower_key(self, key: KT) -> KT | None:
        """
        Returns the greatest key < the given key,
        or None if there is no such key.
        """
        return self._key_at(self._bisect_left(key) - 1)

    def lower_entry(self, key: KT) -> tuple[KT, VT] | None:
        return self._entry_at(self._bisect_left(key) - 1)

    def higher_key(self, key: KT) -> KT | None:
        """
        Returns the smallest key > the given key,
        or None if there is no such key.
        """
        return self._key_at(self._bisect_right(key))

    def higher_entry(self, key: KT) -> tuple[KT, VT] | None:
        return self._entry_at(self._bisect_right(key))

    def range(
        self, start: KT | None = None, end: KT | None = None
    ) -> Iterator[tuple[KT, VT]]:
        """
        Return an iterator over (key, value) pairs in the range [start, end).

        Example:
            >>> tm = TreeMap.from_map({1: "a", 3: "c", 5: "e", 7: "g"})
            >>> list(tm.range(2, 6))  # [(3, "c"), (5, "e")]
        """
        keys = self._sorted_keys
        start_pos = 0 if start is None else self._bisect_left(start)
        end_pos = len(keys) if end is None else self._bisect_left(end)

        for i in range(start_pos, end_pos):
            key = keys[i]
            yield key, self._data[key]

    def values(self) -> ValuesView[VT]:
        """Return the values in key order, captured when called."""
        return self.to_dict().values()

    def items(self) -> ItemsView[KT, VT]:
        """Return the (key, value) pairs in key order, captured when called."""
        return self.to_dict().items()

    def __getitem__(self, key: KT) -> VT:
        return self._data[key]

    def __setitem__(self, key: KT, value: VT) -> None:
        self.set(key, value)

    def __delitem__(self, key: KT) -> None:
        if not self.delete(key):
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[KT]:
        # The key list is replaced, never mutated, so this is a snapshot.
        return iter(self._sorted_keys)

    def __reversed__(self) -> Iterator[KT]:
        return reversed(self._sorted_keys)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{self._name}({self.to_dict()!r})"

    @property
    def _name(self) -> str:
        return self.__class__.__name__

    def _use_comparator(self, comparator: Comparator[KT]) -> None:
        self._comparator = comparator
        self._sort_key = cmp_to_key(comparator)

    def _bisect_left(self, key: KT) -> int:
        return bisect_left(self._sorted_keys, self._sort_key(key), key=self._sort_key)

    def _bisect_right(self, key: KT) -> int:
        return bisect_right(self._sorted_keys, self._sort_key(key), key=self._sort_key)

    def _key_at(self, index: int) -> KT | None:
        if 0 <= index < len(self._sorted_keys):
            return self._sorted_keys[index]
        return None

    def _entry_at(self, index: int) -> tuple[KT, VT] | None:
        if 0 <= index < len(self._sorted_keys):
            key = self._sorted_keys[index]
            return key, self._data[key]
        return None

    def _verify_order(self) -> None:
        if not settings.verify_order:
            return

        keys = self._sorted_keys
        if len(keys) != len(self._data) or any(k not in self._data for k in keys):
            raise OrderInvariantError(
                f"{self._name} key list out of sync with entries"
            )
        for i in range(len(keys) - 1):
            if self._comparator(keys[i], keys[i + 1]) > 0:
                raise OrderInvariantError(
                    f"{self._name} keys not sorted: {keys[i]!r} > {keys[i + 1]!r}"
                )
