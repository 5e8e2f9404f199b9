"""Contract helpers for chaintable."""

from .error import (
    BadInputError,
    EntryConsumedError,
    EnvelopeError,
    ErrorEnvelope,
    InvariantError,
    PolicyError,
    StaleEntryError,
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
