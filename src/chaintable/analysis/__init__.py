"""Diagnostics for inspecting a table's bucket layout."""

from .stats import ResizeRecorder, TableStats, collect_chain_histogram, sample_stats
from .verify import assert_table_invariants, verify_table

__all__ = [
    "ResizeRecorder",
    "TableStats",
    "assert_table_invariants",
    "collect_chain_histogram",
    "sample_stats",
    "verify_table",
]
