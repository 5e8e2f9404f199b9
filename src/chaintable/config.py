"""Typed configuration loader for chaintable."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .contracts.error import BadInputError
from .core.hashing import available_strategies, resolve_hash_strategy
from .core.table import DEFAULT_CAPACITY, DEFAULT_MAX_LOAD_FACTOR, HashTable, TableConfig
from .log import configure_logging

logger = logging.getLogger("chaintable")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}
_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _coerce_bool(raw: Any, name: str) -> bool:
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in _TRUTHY:
            return True
        if normalized in _FALSY:
            return False
        raise BadInputError(f"{name} must be boolean")
    return bool(raw)


@dataclass
class TablePolicy:
    initial_capacity: int = DEFAULT_CAPACITY
    max_load_factor: float = DEFAULT_MAX_LOAD_FACTOR
    hash_strategy: str = "default"
    large_table_warn_threshold: int = 1_000_000

    def validate(self) -> None:
        if isinstance(self.initial_capacity, bool) or not isinstance(self.initial_capacity, int):
            raise BadInputError("table.initial_capacity must be an integer")
        if self.initial_capacity < 1:
            raise BadInputError("table.initial_capacity must be >= 1")
        if isinstance(self.max_load_factor, bool) or not isinstance(self.max_load_factor, (int, float)):
            raise BadInputError("table.max_load_factor must be a number")
        if not 0.0 < self.max_load_factor <= 1.0:
            raise BadInputError("table.max_load_factor must be in (0, 1]")
        if not isinstance(self.hash_strategy, str) or (
            self.hash_strategy.strip().lower() not in available_strategies()
        ):
            raise BadInputError(
                f"table.hash_strategy must be one of: {', '.join(available_strategies())}"
            )
        if isinstance(self.large_table_warn_threshold, bool) or not isinstance(
            self.large_table_warn_threshold, int
        ):
            raise BadInputError("table.large_table_warn_threshold must be an integer")
        if self.large_table_warn_threshold < 0:
            raise BadInputError("table.large_table_warn_threshold must be >= 0")

    def to_table_config(self) -> TableConfig:
        return TableConfig(
            initial_capacity=self.initial_capacity,
            max_load_factor=self.max_load_factor,
            large_table_warn_threshold=self.large_table_warn_threshold,
        )


@dataclass
class LoggingPolicy:
    json: bool = False
    level: str = "INFO"
    file: str | None = None

    def validate(self) -> None:
        if self.level.upper() not in _LEVELS:
            raise BadInputError(f"logging.level must be one of: {', '.join(sorted(_LEVELS))}")


@dataclass
class AppConfig:
    table: TablePolicy = field(default_factory=TablePolicy)
    logging: LoggingPolicy = field(default_factory=LoggingPolicy)

    @classmethod
    def load(cls, path: Path | None) -> AppConfig:
        if path is None:
            cfg = cls()
        else:
            try:
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            except FileNotFoundError as exc:
                raise BadInputError(f"Config file not found: {path}") from exc
            except tomllib.TOMLDecodeError as exc:
                raise BadInputError(f"Invalid TOML: {exc}") from exc
            cfg = cls.from_dict(data)
        cfg.apply_env_overrides(os.environ)
        cfg.validate()
        return cfg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        table_data = data.get("table", {})
        if not isinstance(table_data, dict):
            raise BadInputError("[table] section must be a table")
        try:
            table = TablePolicy(**table_data)
        except TypeError as exc:
            raise BadInputError(f"Unknown key in [table]: {exc}") from exc

        logging_data = data.get("logging", {})
        if not isinstance(logging_data, dict):
            raise BadInputError("[logging] section must be a table")
        logging_kwargs: dict[str, Any] = {}
        if "json" in logging_data:
            logging_kwargs["json"] = _coerce_bool(logging_data["json"], "logging.json")
        if "level" in logging_data:
            logging_kwargs["level"] = str(logging_data["level"])
        if "file" in logging_data:
            raw_file = logging_data["file"]
            logging_kwargs["file"] = str(raw_file) if raw_file else None
        unknown = set(logging_data) - {"json", "level", "file"}
        if unknown:
            raise BadInputError(f"Unknown key(s) in [logging]: {', '.join(sorted(unknown))}")
        return cls(table=table, logging=LoggingPolicy(**logging_kwargs))

    def apply_env_overrides(self, env: Mapping[str, str]) -> None:
        table_mapping: dict[str, tuple[str, Callable[[str], Any]]] = {
            "CHAINTABLE_INITIAL_CAPACITY": ("initial_capacity", int),
            "CHAINTABLE_MAX_LOAD_FACTOR": ("max_load_factor", float),
            "CHAINTABLE_HASH_STRATEGY": ("hash_strategy", str),
            "CHAINTABLE_LARGE_WARN_THRESHOLD": ("large_table_warn_threshold", int),
        }
        for key, (attr, caster) in table_mapping.items():
            raw_value = env.get(key)
            if raw_value is None:
                continue
            try:
                value = caster(raw_value)
            except ValueError as exc:
                raise BadInputError(f"Invalid env override {key}={raw_value!r}") from exc
            setattr(self.table, attr, value)

        raw_json = env.get("CHAINTABLE_LOG_JSON")
        if raw_json is not None:
            normalized = raw_json.strip().lower()
            if normalized in _TRUTHY:
                self.logging.json = True
            elif normalized in _FALSY:
                self.logging.json = False
            else:
                raise BadInputError(f"Invalid env override CHAINTABLE_LOG_JSON={raw_json!r}")

        raw_level = env.get("CHAINTABLE_LOG_LEVEL")
        if raw_level is not None:
            self.logging.level = raw_level.strip()

        raw_file = env.get("CHAINTABLE_LOG_FILE")
        if raw_file is not None:
            self.logging.file = raw_file or None

    def validate(self) -> None:
        self.table.validate()
        self.logging.validate()


DEFAULT_CONFIG = AppConfig()


def load_app_config(path: str | None) -> AppConfig:
    config_path = Path(path) if path else None
    return AppConfig.load(config_path)


def build_table(cfg: AppConfig) -> HashTable[Any, Any]:
    """Construct an empty table from a validated config."""

    policy = cfg.table
    strategy = resolve_hash_strategy(policy.hash_strategy)
    table: HashTable[Any, Any] = HashTable(hash_strategy=strategy, cfg=policy.to_table_config())
    logger.debug(
        "Built table (capacity=%d, strategy=%s, max_load_factor=%.3f)",
        table.capacity(),
        policy.hash_strategy,
        policy.max_load_factor,
    )
    return table


def apply_logging_policy(cfg: AppConfig) -> None:
    policy = cfg.logging
    configure_logging(use_json=policy.json, log_file=policy.file, level=policy.level.upper())


__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG",
    "LoggingPolicy",
    "TablePolicy",
    "apply_logging_policy",
    "build_table",
    "load_app_config",
]
