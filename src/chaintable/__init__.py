"""Separate-chaining hash table with pluggable hashing and an entry API."""

from . import analysis, contracts, core
from .core import (
    ConstantHashStrategy,
    DefaultHashStrategy,
    HashStrategy,
    HashTable,
    TableConfig,
    ValueRef,
)

__all__ = [
    "analysis",
    "contracts",
    "core",
    "ConstantHashStrategy",
    "DefaultHashStrategy",
    "HashStrategy",
    "HashTable",
    "TableConfig",
    "ValueRef",
]
