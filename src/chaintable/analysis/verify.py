from __future__ import annotations

from typing import Any, List, Tuple

from ..contracts.error import InvariantError
from ..core.table import HashTable


def verify_table(table: HashTable[Any, Any], verbose: bool = False) -> Tuple[bool, List[str]]:
    """Check counter, placement and key uniqueness; return ``(ok, messages)``."""

    msgs: List[str] = []
    total = 0
    misplaced = 0
    seen: List[Any] = []
    duplicates = 0
    for idx, chain in enumerate(table._buckets):
        total += len(chain)
        for cell in chain:
            if table._index(cell.key) != idx:
                misplaced += 1
                msgs.append(f"Key {cell.key!r} stored in bucket {idx}, expected {table._index(cell.key)}")
            if any(cell.key == other for other in seen):
                duplicates += 1
                msgs.append(f"Duplicate key {cell.key!r} in bucket {idx}")
            seen.append(cell.key)
    size_ok = total == len(table)
    if not size_ok:
        msgs.append(f"Size mismatch: size={len(table)}, summed={total}")
    if verbose:
        msgs.append(
            f"Buckets={table.capacity()}, Size={len(table)}, "
            f"LF={table.load_factor():.3f}, MaxChainLen={table.max_chain_len()}"
        )
    return (size_ok and misplaced == 0 and duplicates == 0), msgs


def assert_table_invariants(table: HashTable[Any, Any]) -> None:
    ok, msgs = verify_table(table)
    if not ok:
        raise InvariantError("; ".join(msgs), hint="the key type's __eq__ and __hash__ may disagree")


__all__ = ["assert_table_invariants", "verify_table"]
