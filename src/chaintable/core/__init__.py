from .cells import ValueRef
from .entry import OccupiedEntry, VacantEntry
from .hashing import (
    CallableHashStrategy,
    ConstantHashStrategy,
    DefaultHashStrategy,
    FibonacciHashStrategy,
    HashStrategy,
    available_strategies,
    resolve_hash_strategy,
)
from .iteration import IntoKeys, TableIterator
from .table import DEFAULT_CAPACITY, DEFAULT_MAX_LOAD_FACTOR, HashTable, TableConfig

__all__ = [
    "CallableHashStrategy",
    "ConstantHashStrategy",
    "DefaultHashStrategy",
    "FibonacciHashStrategy",
    "HashStrategy",
    "HashTable",
    "IntoKeys",
    "OccupiedEntry",
    "TableConfig",
    "TableIterator",
    "VacantEntry",
    "ValueRef",
    "available_strategies",
    "resolve_hash_strategy",
    "DEFAULT_CAPACITY",
    "DEFAULT_MAX_LOAD_FACTOR",
]
