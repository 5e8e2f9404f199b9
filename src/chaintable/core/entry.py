"""Occupied/vacant entry views for get-or-insert workflows.

A view is bound to one key and one table. Its terminal call (``or_insert`` or
``or_insert_with``) may resize the table, so the view refuses any further use
afterwards. A view created before some other structural change to the table
is stale and refuses use as well; ask the table for a fresh one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from ..contracts.error import EntryConsumedError, StaleEntryError
from .cells import ValueRef, _Entry

if TYPE_CHECKING:  # pragma: no cover
    from .table import HashTable

K = TypeVar("K")
V = TypeVar("V")


class _EntryView(ABC, Generic[K, V]):
    __slots__ = ("_table", "_key", "_version", "_consumed")

    def __init__(self, table: "HashTable[K, V]", key: K) -> None:
        self._table = table
        self._key = key
        self._version = table._version
        self._consumed = False

    @property
    def key(self) -> K:
        return self._key

    @abstractmethod
    def is_occupied(self) -> bool: ...

    def _check_usable(self) -> None:
        if self._consumed:
            raise EntryConsumedError(f"Entry for {self._key!r} was already consumed")
        if self._table._version != self._version:
            raise StaleEntryError(
                f"Entry for {self._key!r} is stale; the table changed after it was created",
                hint="call table.entry(key) again",
            )

    def _claim(self) -> "HashTable[K, V]":
        self._check_usable()
        self._consumed = True
        return self._table

    @abstractmethod
    def or_insert(self, default: V) -> ValueRef[V]: ...

    @abstractmethod
    def or_insert_with(self, factory: Callable[[], V]) -> ValueRef[V]: ...

    @abstractmethod
    def and_modify(self, fn: Callable[[V], V]) -> "_EntryView[K, V]": ...

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "live"
        return f"{type(self).__name__}(key={self._key!r}, {state})"


class OccupiedEntry(_EntryView[K, V]):
    """View over a key that is present in the table."""

    __slots__ = ("_cell",)

    def __init__(self, table: "HashTable[K, V]", key: K, cell: _Entry) -> None:
        super().__init__(table, key)
        self._cell = cell

    def is_occupied(self) -> bool:
        return True

    def get(self) -> V:
        self._check_usable()
        return self._cell.value

    def or_insert(self, default: V) -> ValueRef[V]:
        del default
        self._claim()
        return ValueRef(self._cell)

    def or_insert_with(self, factory: Callable[[], V]) -> ValueRef[V]:
        del factory
        self._claim()
        return ValueRef(self._cell)

    def and_modify(self, fn: Callable[[V], V]) -> "OccupiedEntry[K, V]":
        self._check_usable()
        self._cell.value = fn(self._cell.value)
        return self


class VacantEntry(_EntryView[K, V]):
    """View over a key that is absent from the table."""

    __slots__ = ()

    def is_occupied(self) -> bool:
        return False

    def or_insert(self, default: V) -> ValueRef[V]:
        table = self._claim()
        return ValueRef(table._insert_new(self._key, default))

    def or_insert_with(self, factory: Callable[[], V]) -> ValueRef[V]:
        self._check_usable()
        value = factory()
        table = self._claim()
        return ValueRef(table._insert_new(self._key, value))

    def and_modify(self, fn: Callable[[Any], Any]) -> "VacantEntry[K, V]":
        del fn
        self._check_usable()
        return self


__all__ = ["OccupiedEntry", "VacantEntry"]
