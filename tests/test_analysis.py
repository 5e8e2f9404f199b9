from __future__ import annotations

import pytest

from chaintable.analysis import (
    ResizeRecorder,
    assert_table_invariants,
    collect_chain_histogram,
    sample_stats,
    verify_table,
)
from chaintable.contracts.error import InvariantError
from chaintable.core.hashing import CallableHashStrategy, ConstantHashStrategy
from chaintable.core.table import HashTable, TableConfig


class DriftingKey:
    """Key whose hash changes after insertion, breaking the placement invariant."""

    def __init__(self, seed: int) -> None:
        self.seed = seed

    def __hash__(self) -> int:
        return self.seed

    def __eq__(self, other: object) -> bool:
        return self is other


def test_verify_healthy_table() -> None:
    table: HashTable[int, int] = HashTable.with_capacity(3)
    for i in range(20):
        table.insert(i, i)
    for i in range(0, 20, 3):
        table.remove(i)
    ok, msgs = verify_table(table, verbose=True)
    assert ok
    assert len(msgs) == 1
    assert msgs[0].startswith(f"Buckets={table.capacity()}, Size={len(table)}")
    assert_table_invariants(table)


def test_verify_detects_misplaced_key() -> None:
    table: HashTable[DriftingKey, str] = HashTable.with_capacity(8)
    key = DriftingKey(1)
    table.insert(key, "v")
    key.seed = 2
    ok, msgs = verify_table(table)
    assert not ok
    assert any("expected 2" in msg for msg in msgs)
    with pytest.raises(InvariantError) as excinfo:
        assert_table_invariants(table)
    assert excinfo.value.hint


def test_verify_detects_size_mismatch() -> None:
    table: HashTable[str, int] = HashTable()
    table.insert("a", 1)
    table._size = 5
    ok, msgs = verify_table(table)
    assert not ok
    assert "Size mismatch: size=5, summed=1" in msgs


def test_sample_stats() -> None:
    table: HashTable[int, int] = HashTable.with_hash_strategy(CallableHashStrategy(lambda k: k), capacity=8)
    for key in (0, 8, 16, 3):
        table.insert(key, key)
    stats = sample_stats(table)
    assert stats.capacity == 8
    assert stats.size == 4
    assert stats.load_factor == pytest.approx(0.5)
    assert stats.max_chain_len == 3
    assert stats.empty_buckets == 6
    assert stats.to_dict()["max_chain_len"] == 3


def test_collect_chain_histogram() -> None:
    table: HashTable[int, int] = HashTable.with_hash_strategy(ConstantHashStrategy(), capacity=4)
    table.insert(1, 1)
    table.insert(2, 2)
    assert collect_chain_histogram(table) == [[0, 3], [2, 1]]
    assert collect_chain_histogram(HashTable.with_capacity(2)) == [[0, 2]]


def test_resize_recorder_tracks_growth() -> None:
    ticks = iter(range(100))
    recorder = ResizeRecorder(clock=lambda: float(next(ticks)))
    table: HashTable[int, int] = HashTable.with_capacity(1)
    recorder.attach(table)
    for i in range(7):
        table.insert(i, i)
    assert recorder.resizes_total == 4
    assert [(e["from"], e["to"]) for e in recorder.events] == [(1, 2), (2, 4), (4, 8), (8, 16)]
    assert all(e["type"] == "resize" for e in recorder.events)
    assert [e["t"] for e in recorder.events] == [0.0, 1.0, 2.0, 3.0]


def test_resize_recorder_only_sees_attached_table_and_keeps_existing_hook() -> None:
    user_events: list[tuple[int, int]] = []
    shared = TableConfig(initial_capacity=1, on_resize=lambda old, new: user_events.append((old, new)))
    watched: HashTable[int, int] = HashTable(cfg=shared)
    other: HashTable[int, int] = HashTable(cfg=shared)
    recorder = ResizeRecorder()
    recorder.attach(watched)

    other.insert(1, 1)
    watched.insert(1, 1)

    assert recorder.resizes_total == 1
    assert [(e["from"], e["to"]) for e in recorder.events] == [(1, 2)]
    assert user_events == [(1, 2), (1, 2)]
    assert shared.on_resize is not watched.cfg.on_resize
    assert other.cfg is not shared
