from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar, Union

from ..contracts.error import BadInputError
from ..log import LOGGER_NAME, table_extra
from .cells import ValueRef, _Entry
from .entry import OccupiedEntry, VacantEntry
from .hashing import MASK64, DefaultHashStrategy, HashStrategy
from .iteration import IntoKeys, TableIterator

logger = logging.getLogger(LOGGER_NAME)

K = TypeVar("K")
V = TypeVar("V")

DEFAULT_CAPACITY = 10
DEFAULT_MAX_LOAD_FACTOR = 0.75


@dataclass
class TableConfig:
    initial_capacity: int = DEFAULT_CAPACITY
    max_load_factor: float = DEFAULT_MAX_LOAD_FACTOR
    large_table_warn_threshold: int = 1_000_000
    on_resize: Optional[Callable[[int, int], None]] = None


def _check_capacity(capacity: Any) -> int:
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise BadInputError(f"capacity must be an int, got {type(capacity).__name__}")
    if capacity < 1:
        raise BadInputError(f"capacity must be >= 1, got {capacity}")
    return capacity


class HashTable(Generic[K, V]):
    """Separate-chaining hash table with doubling growth.

    A new key is placed only after checking the projected load
    ``(len + 1) / capacity``; above ``max_load_factor`` the bucket store is
    doubled and every entry rehashed first. Overwriting an existing key never
    grows the table, and removal never shrinks it. ``capacity()`` is therefore
    the most recent growth target, not a bound derived from the current size.
    """

    __slots__ = ("cfg", "_strategy", "_buckets", "_size", "_version")

    def __init__(
        self,
        capacity: Optional[int] = None,
        hash_strategy: Optional[HashStrategy] = None,
        cfg: Optional[TableConfig] = None,
    ) -> None:
        self.cfg = replace(cfg) if cfg is not None else TableConfig()
        if not self.cfg.max_load_factor > 0:
            raise BadInputError("max_load_factor must be > 0")
        initial = _check_capacity(self.cfg.initial_capacity if capacity is None else capacity)
        if hash_strategy is None:
            hash_strategy = DefaultHashStrategy()
        elif not isinstance(hash_strategy, HashStrategy):
            raise BadInputError(
                f"{type(hash_strategy).__name__} does not implement hash(key) -> int"
            )
        self._strategy: HashStrategy = hash_strategy
        self._buckets: List[List[_Entry]] = [[] for _ in range(initial)]
        self._size = 0
        self._version = 0

    @classmethod
    def with_capacity(
        cls, capacity: int, hash_strategy: Optional[HashStrategy] = None
    ) -> "HashTable[K, V]":
        return cls(capacity, hash_strategy)

    @classmethod
    def with_hash_strategy(
        cls, hash_strategy: HashStrategy, capacity: Optional[int] = None
    ) -> "HashTable[K, V]":
        return cls(capacity, hash_strategy)

    @property
    def hash_strategy(self) -> HashStrategy:
        return self._strategy

    def __len__(self) -> int:
        return self._size

    def capacity(self) -> int:
        return len(self._buckets)

    def load_factor(self) -> float:
        return self._size / len(self._buckets)

    def _index(self, key: Any) -> int:
        return (self._strategy.hash(key) & MASK64) % len(self._buckets)

    def _find(self, key: Any) -> Optional[_Entry]:
        for cell in self._buckets[self._index(key)]:
            if cell.key == key:
                return cell
        return None

    def _resize(self, new_capacity: int) -> None:
        old = self._buckets
        old_capacity = len(old)
        if self._size >= self.cfg.large_table_warn_threshold:
            logger.warning(
                "Large table resize starting (size=%d, buckets %d -> %d)",
                self._size,
                old_capacity,
                new_capacity,
                extra=table_extra(old_capacity, new_capacity, self._size),
            )
        self._buckets = [[] for _ in range(new_capacity)]
        for chain in old:
            for cell in chain:
                self._buckets[self._index(cell.key)].append(cell)
        self._version += 1
        logger.debug(
            "Resized table %d -> %d buckets (entries=%d)",
            old_capacity,
            new_capacity,
            self._size,
            extra=table_extra(old_capacity, new_capacity, self._size),
        )
        if self.cfg.on_resize:
            try:
                self.cfg.on_resize(old_capacity, new_capacity)
            except Exception:
                logger.exception("on_resize callback failed")

    def _insert_new(self, key: K, value: V) -> _Entry:
        # Caller guarantees ``key`` is absent.
        if (self._size + 1) / len(self._buckets) > self.cfg.max_load_factor:
            self._resize(len(self._buckets) * 2)
        cell = _Entry(key, value)
        self._buckets[self._index(key)].append(cell)
        self._size += 1
        self._version += 1
        return cell

    def _pop_cell(self, key: Any) -> Optional[_Entry]:
        chain = self._buckets[self._index(key)]
        for idx, cell in enumerate(chain):
            if cell.key == key:
                chain[idx] = chain[-1]
                chain.pop()
                self._size -= 1
                self._version += 1
                return cell
        return None

    def insert(self, key: K, value: V) -> Optional[V]:
        """Store ``value`` under ``key``; return the value it replaced, if any."""

        cell = self._find(key)
        if cell is not None:
            previous = cell.value
            cell.value = value
            return previous
        self._insert_new(key, value)
        return None

    def get(self, key: Any, default: Optional[V] = None) -> Optional[V]:
        cell = self._find(key)
        return default if cell is None else cell.value

    def get_mut(self, key: Any) -> Optional[ValueRef[V]]:
        cell = self._find(key)
        return None if cell is None else ValueRef(cell)

    def remove(self, key: Any, default: Optional[V] = None) -> Optional[V]:
        """Swap-remove ``key`` from its chain and return its value."""

        cell = self._pop_cell(key)
        return default if cell is None else cell.value

    def entry(self, key: K) -> Union[OccupiedEntry[K, V], VacantEntry[K, V]]:
        cell = self._find(key)
        if cell is not None:
            return OccupiedEntry(self, key, cell)
        return VacantEntry(self, key)

    def clear(self) -> None:
        self._buckets = [[] for _ in range(len(self._buckets))]
        self._size = 0
        self._version += 1

    def into_keys(self) -> IntoKeys[K]:
        """Move every key out of the table; the table is left empty."""

        keys = IntoKeys(key for key, _ in self)
        self.clear()
        return keys

    def __iter__(self) -> TableIterator[K, V]:
        return TableIterator(self)

    def items(self) -> TableIterator[K, V]:
        return TableIterator(self)

    def keys(self) -> Iterator[K]:
        for key, _ in self:
            yield key

    def values(self) -> Iterator[V]:
        for _, value in self:
            yield value

    def __contains__(self, key: Any) -> bool:
        return self._find(key) is not None

    def __getitem__(self, key: Any) -> V:
        cell = self._find(key)
        if cell is None:
            raise KeyError(key)
        return cell.value

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: Any) -> None:
        if self._pop_cell(key) is None:
            raise KeyError(key)

    def max_chain_len(self) -> int:
        longest = 0
        for chain in self._buckets:
            longest = max(longest, len(chain))
        return longest

    def chain_lengths(self) -> List[int]:
        return [len(chain) for chain in self._buckets]

    def __repr__(self) -> str:
        return f"HashTable(size={self._size}, capacity={len(self._buckets)}, strategy={self._strategy!r})"


__all__ = ["DEFAULT_CAPACITY", "DEFAULT_MAX_LOAD_FACTOR", "HashTable", "TableConfig"]
