from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

if TYPE_CHECKING:  # pragma: no cover
    from .table import HashTable

K = TypeVar("K")
V = TypeVar("V")


class TableIterator(Generic[K, V]):
    """Flat ``(key, value)`` traversal over the bucket/chain store.

    The cursor is an explicit ``(bucket, position)`` pair. Buckets are visited
    in store order and chains in chain order; empty chains are stepped over in
    a loop.
    """

    __slots__ = ("_table", "_bucket", "_pos", "_version")

    def __init__(self, table: "HashTable[K, V]") -> None:
        self._table: Optional["HashTable[K, V]"] = table
        self._bucket = 0
        self._pos = 0
        self._version = table._version

    def __iter__(self) -> "TableIterator[K, V]":
        return self

    @property
    def position(self) -> Tuple[int, int]:
        return self._bucket, self._pos

    def __next__(self) -> Tuple[K, V]:
        table = self._table
        if table is None:
            raise StopIteration
        if table._version != self._version:
            raise RuntimeError("HashTable changed size during iteration")
        buckets = table._buckets
        while self._bucket < len(buckets):
            chain = buckets[self._bucket]
            if self._pos < len(chain):
                cell = chain[self._pos]
                self._pos += 1
                return cell.key, cell.value
            self._bucket += 1
            self._pos = 0
        self._table = None
        raise StopIteration


class IntoKeys(Generic[K]):
    """Keys moved out of a consumed table, in bucket/chain order."""

    __slots__ = ("_keys",)

    def __init__(self, keys: Iterable[K]) -> None:
        self._keys: List[K] = list(keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[K]:
        return iter(self._keys)

    def __contains__(self, key: Any) -> bool:
        return key in self._keys

    def drain(self) -> Iterator[K]:
        """Hand over the keys and leave this view empty."""

        keys, self._keys = self._keys, []
        return iter(keys)

    def __repr__(self) -> str:
        return f"IntoKeys({self._keys!r})"


__all__ = ["IntoKeys", "TableIterator"]
