"""A mapping that keeps every value added under a key, newest first."""

from __future__ import annotations

import itertools
from collections.abc import Hashable, Iterator
from typing import Any


class MultiMap:
    """Map from keys to values that permits several entries per key.

    Lookups see the most recently added entry for a key; iteration and
    ``items`` follow insertion order.
    """

    def __init__(self) -> None:
        self._counter = itertools.count()
        self._entries: dict[int, tuple[Hashable, Any]] = {}
        self._by_key: dict[Hashable, list[int]] = {}

    def add(self, key: Hashable, value: Any) -> None:
        """Add a new entry, even if ``key`` is already present."""
        index = next(self._counter)
        self._entries[index] = (key, value)
        self._by_key.setdefault(key, []).append(index)

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the newest value for ``key``, or ``default``."""
        indices = self._by_key.get(key)
        if not indices:
            return default
        return self._entries[indices[-1]][1]

    def matching(self, key: Hashable) -> Iterator[Any]:
        """Yield every value stored under ``key``, newest first."""
        for index in reversed(list(self._by_key.get(key, ()))):
            entry = self._entries.get(index)
            if entry is not None:
                yield entry[1]

    def items(self) -> Iterator[tuple[Hashable, Any]]:
        """Yield ``(key, value)`` pairs in insertion order."""
        yield from list(self._entries.values())

    def __setitem__(self, key: Hashable, value: Any) -> None:
        indices = self._by_key.get(key)
        if indices:
            self._entries[indices[-1]] = (key, value)
        else:
            self.add(key, value)

    def __getitem__(self, key: Hashable) -> Any:
        indices = self._by_key.get(key)
        if not indices:
            raise KeyError(key)
        return self._entries[indices[-1]][1]

    def __delitem__(self, key: Hashable) -> None:
        """Remove the newest entry for ``key``."""
        indices = self._by_key.get(key)
        if not indices:
            raise KeyError(key)
        del self._entries[indices.pop()]
        if not indices:
            del self._by_key[key]

    def __contains__(self, key: object) -> bool:
        return bool(self._by_key.get(key))  # type: ignore[call-overload]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Hashable]:
        return (key for key, _ in list(self._entries.values()))