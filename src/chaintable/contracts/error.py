"""Error envelope helpers for the chaintable package."""

from __future__ import annotations

import json
from dataclasses import dataclass


@dataclass(slots=True)
class ErrorEnvelope:
    """Machine-readable error contract for table and config failures."""

    error: str
    detail: str
    hint: str | None = None

    def to_json(self) -> str:
        payload = {"error": self.error, "detail": self.detail}
        if self.hint:
            payload["hint"] = self.hint
        return json.dumps(payload, ensure_ascii=False)


class EnvelopeError(Exception):
    """Base exception that carries an optional hint for the error envelope."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def envelope(self) -> ErrorEnvelope:
        for exc_type, label in _EXCEPTION_ORDER:
            if isinstance(self, exc_type):
                return ErrorEnvelope(error=label, detail=str(self), hint=self.hint)
        return ErrorEnvelope(error="Unhandled", detail=str(self), hint=self.hint)


class BadInputError(EnvelopeError):
    """Raised for malformed input (capacities, config values, strategy names)."""


class InvariantError(EnvelopeError):
    """Raised when internal consistency checks fail."""


class PolicyError(EnvelopeError):
    """Raised for contract violations by the caller."""


class EntryConsumedError(PolicyError):
    """Raised when an entry view is used after its terminal call."""


class StaleEntryError(PolicyError):
    """Raised when an entry view outlives a structural change to its table."""


_EXCEPTION_ORDER: tuple[tuple[type[EnvelopeError], str], ...] = (
    (BadInputError, "BadInput"),
    (InvariantError, "Invariant"),
    (EntryConsumedError, "EntryConsumed"),
    (StaleEntryError, "StaleEntry"),
    (PolicyError, "Policy"),
)


__all__ = [
    "ErrorEnvelope",
    "EnvelopeError",
    "BadInputError",
    "InvariantError",
    "PolicyError",
    "EntryConsumedError",
    "StaleEntryError",
]
