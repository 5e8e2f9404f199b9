from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

V = TypeVar("V")


@dataclass
class _Entry:
    key: Any
    value: Any


class ValueRef(Generic[V]):
    """Writable handle on one stored value.

    Cells move between chains on resize without being copied, so a handle
    obtained before a resize still points at the live value afterwards. Once
    its key is removed the handle is detached and writes no longer reach the
    table.
    """

    __slots__ = ("_cell",)

    def __init__(self, cell: _Entry) -> None:
        self._cell = cell

    @property
    def key(self) -> Any:
        return self._cell.key

    @property
    def value(self) -> V:
        return self._cell.value

    @value.setter
    def value(self, new_value: V) -> None:
        self._cell.value = new_value

    def get(self) -> V:
        return self._cell.value

    def set(self, new_value: V) -> V:
        """Store ``new_value`` and return the value it replaced."""

        previous = self._cell.value
        self._cell.value = new_value
        return previous

    def __repr__(self) -> str:
        return f"ValueRef(key={self._cell.key!r}, value={self._cell.value!r})"


__all__ = ["ValueRef"]
