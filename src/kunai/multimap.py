"""
Grouped registry mapping each key to an ordered list of values.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class Multimap(Generic[K, V]):
    """
    An insertion-ordered mapping from a key to the list of values added under it.

    Keys are matched exactly. Looking up a key that was never added yields an
    empty list and does not create a group.
    """

    def __init__(self) -> None:
        self._items: dict[K, list[V]] = {}

    def add(self, key: K, value: V) -> None:
        """Append ``value`` to the group for ``key``."""
        group = self._items.get(key)
        if group is None:
            group = self._items[key] = []
        group.append(value)

    def lookup(self, key: K) -> list[V]:
        """
        Get the values registered under ``key``.

        Returns the live group when one exists, otherwise a new empty list.
        """
        group = self._items.get(key)
        return group if group is not None else []

    def __getitem__(self, key: K) -> list[V]:
        return self.lookup(key)

    def remove(self, key: K, value: V) -> bool:
        """Remove ``value`` itself, compared by identity, from the group for ``key``."""
        for i, existing in enumerate(self._items.get(key, ())):
            if existing is value:
                del self._items[key][i]
                return True
        return False

    def remove_all(self, key: K) -> bool:
        """Remove the whole group for ``key``."""
        return self._items.pop(key, None) is not None

    def clear(self) -> None:
        """Remove every group."""
        self._items.clear()

    def contains_key(self, key: K) -> bool:
        return key in self._items

    def contains_value(self, value: V) -> bool:
        return any(existing is value for group in self._items.values() for existing in group)

    def keys(self) -> list[K]:
        return list(self._items)

    def values(self) -> list[V]:
        """Get all values, grouped by key in key insertion order."""
        return [value for group in self._items.values() for value in group]

    def items(self) -> list[tuple[K, list[V]]]:
        return list(self._items.items())

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[K]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __str__(self) -> str:
        groups = ", ".join(f"{getattr(k, '__name__', k)}: {len(v)}" for k, v in self._items.items())
        return f"Multimap({groups})"
