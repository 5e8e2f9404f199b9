from __future__ import annotations

import pytest

from chaintable.contracts.error import BadInputError
from chaintable.core.hashing import (
    MASK64,
    CallableHashStrategy,
    ConstantHashStrategy,
    DefaultHashStrategy,
    FibonacciHashStrategy,
    HashStrategy,
    available_strategies,
    fold64,
    resolve_hash_strategy,
)


@pytest.mark.parametrize(
    "strategy",
    [DefaultHashStrategy(), FibonacciHashStrategy(), ConstantHashStrategy(3), CallableHashStrategy(len)],
)
def test_strategies_are_deterministic_and_64_bit(strategy: HashStrategy) -> None:
    assert isinstance(strategy, HashStrategy)
    for key in ("", "a", "gedalia", "x" * 100):
        seed = strategy.hash(key)
        assert seed == strategy.hash(key)
        assert 0 <= seed <= MASK64


def test_equal_keys_hash_identically() -> None:
    for strategy in (DefaultHashStrategy(), FibonacciHashStrategy()):
        assert strategy.hash(1) == strategy.hash(1.0) == strategy.hash(True)
        assert strategy.hash((1, "a")) == strategy.hash((1, "a"))


def test_fold64_handles_negative_values() -> None:
    assert fold64(-1) == MASK64
    assert fold64(1 << 64) == 0
    assert DefaultHashStrategy().hash(-1) == fold64(hash(-1))


def test_fibonacci_keeps_sequential_ints_distinct_and_scrambled() -> None:
    strategy = FibonacciHashStrategy()
    seeds = [strategy.hash(i) for i in range(1000)]
    assert len(set(seeds)) == 1000
    assert seeds[1:4] != [1, 2, 3]
    assert seeds != sorted(seeds)


def test_constant_strategy_ignores_key() -> None:
    strategy = ConstantHashStrategy(-1)
    assert strategy.hash("a") == strategy.hash(object()) == MASK64


def test_callable_strategy_requires_callable() -> None:
    with pytest.raises(BadInputError):
        CallableHashStrategy(42)  # type: ignore[arg-type]


def test_resolve_hash_strategy_by_name() -> None:
    assert available_strategies() == ("constant", "default", "fibonacci")
    assert isinstance(resolve_hash_strategy("default"), DefaultHashStrategy)
    assert isinstance(resolve_hash_strategy(" Fibonacci "), FibonacciHashStrategy)
    assert isinstance(resolve_hash_strategy("constant"), ConstantHashStrategy)


def test_resolve_unknown_strategy_raises_with_hint() -> None:
    with pytest.raises(BadInputError) as excinfo:
        resolve_hash_strategy("sha256")
    assert excinfo.value.hint is not None
    assert "default" in excinfo.value.hint
