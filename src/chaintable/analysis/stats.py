from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional

from ..core.table import HashTable


@dataclass(frozen=True)
class TableStats:
    capacity: int
    size: int
    load_factor: float
    max_chain_len: int
    empty_buckets: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def sample_stats(table: HashTable[Any, Any]) -> TableStats:
    lengths = table.chain_lengths()
    return TableStats(
        capacity=len(lengths),
        size=len(table),
        load_factor=table.load_factor(),
        max_chain_len=max(lengths, default=0),
        empty_buckets=sum(1 for n in lengths if n == 0),
    )


def collect_chain_histogram(table: HashTable[Any, Any]) -> List[List[int]]:
    """Return ``[[chain_len, bucket_count], ...]`` sorted by chain length."""

    histogram: Dict[int, int] = defaultdict(int)
    for length in table.chain_lengths():
        histogram[length] += 1
    return [[length, count] for length, count in sorted(histogram.items())]


class ResizeRecorder:
    """Record table resizes as events through the table's ``on_resize`` hook."""

    def __init__(
        self,
        events: Optional[List[Dict[str, Any]]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.events: List[Dict[str, Any]] = events if events is not None else []
        self.clock = clock or (lambda: 0.0)
        self.resizes_total = 0

    def on_resize(self, old_capacity: int, new_capacity: int) -> None:
        self.resizes_total += 1
        self.events.append({"type": "resize", "from": old_capacity, "to": new_capacity, "t": self.clock()})

    def attach(self, table: HashTable[Any, Any]) -> None:
        previous = table.cfg.on_resize
        if previous is None:
            table.cfg.on_resize = self.on_resize
            return

        def chained(old_capacity: int, new_capacity: int) -> None:
            previous(old_capacity, new_capacity)
            self.on_resize(old_capacity, new_capacity)

        table.cfg.on_resize = chained


__all__ = ["ResizeRecorder", "TableStats", "collect_chain_histogram", "sample_stats"]
