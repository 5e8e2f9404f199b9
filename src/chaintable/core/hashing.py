"""Pluggable hash strategies used by :class:`chaintable.core.table.HashTable`.

A strategy turns a key into an unsigned 64-bit seed. The table reduces that
seed modulo its bucket count, so a strategy never needs to know the capacity.
Equal keys must produce equal seeds; distinct keys may collide.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Protocol, runtime_checkable

from ..contracts.error import BadInputError

MASK64: int = 0xFFFF_FFFF_FFFF_FFFF
_HASH_GOLDEN_64: int = 0x9E3779B97F4A7C15


def fold64(value: int) -> int:
    """Fold an arbitrary Python int (possibly negative) into ``[0, 2**64)``."""

    return value & MASK64


@runtime_checkable
class HashStrategy(Protocol):
    def hash(self, key: Any) -> int: ...


class DefaultHashStrategy:
    """Builtin ``hash()`` folded to 64 bits."""

    __slots__ = ()

    def hash(self, key: Any) -> int:
        return fold64(hash(key))

    def __repr__(self) -> str:
        return "DefaultHashStrategy()"


class FibonacciHashStrategy:
    """Multiplicative hashing with the 64-bit golden ratio constant.

    Spreads runs of small integers (whose builtin hash is the identity)
    across buckets instead of filling them in order.
    """

    __slots__ = ()

    def hash(self, key: Any) -> int:
        x = fold64(hash(key) * _HASH_GOLDEN_64)
        return x ^ (x >> 32)

    def __repr__(self) -> str:
        return "FibonacciHashStrategy()"


class ConstantHashStrategy:
    """Degenerate strategy mapping every key to the same seed."""

    __slots__ = ("value",)

    def __init__(self, value: int = 0) -> None:
        self.value = fold64(value)

    def hash(self, key: Any) -> int:
        del key
        return self.value

    def __repr__(self) -> str:
        return f"ConstantHashStrategy(value={self.value})"


class CallableHashStrategy:
    """Adapt a plain ``key -> int`` function to the strategy protocol."""

    __slots__ = ("fn",)

    def __init__(self, fn: Callable[[Any], int]) -> None:
        if not callable(fn):
            raise BadInputError("CallableHashStrategy requires a callable")
        self.fn = fn

    def hash(self, key: Any) -> int:
        return fold64(self.fn(key))

    def __repr__(self) -> str:
        return f"CallableHashStrategy({getattr(self.fn, '__name__', self.fn)!r})"


_STRATEGIES: Dict[str, Callable[[], HashStrategy]] = {
    "default": DefaultHashStrategy,
    "fibonacci": FibonacciHashStrategy,
    "constant": ConstantHashStrategy,
}


def available_strategies() -> tuple[str, ...]:
    return tuple(sorted(_STRATEGIES))


def resolve_hash_strategy(name: str) -> HashStrategy:
    """Instantiate a registered strategy by name."""

    factory = _STRATEGIES.get(name.strip().lower())
    if factory is None:
        raise BadInputError(
            f"Unknown hash strategy: {name!r}",
            hint=f"choose one of: {', '.join(available_strategies())}",
        )
    return factory()


__all__ = [
    "MASK64",
    "CallableHashStrategy",
    "ConstantHashStrategy",
    "DefaultHashStrategy",
    "FibonacciHashStrategy",
    "HashStrategy",
    "available_strategies",
    "fold64",
    "resolve_hash_strategy",
]
