"""Exceptions raised by the validation core.

Failures raised by estimators, evaluators or models while fitting or scoring
are not wrapped: they propagate to the caller as they were raised.
"""

from pathlib import Path


class TuningError(Exception):
    """Base exception for errors raised by this package."""


class ConfigurationError(TuningError, ValueError):
    """Raised when a validator is configured with invalid values."""


class CandidateCountMismatchError(TuningError):
    """Raised when a batched fit returns a different number of models than candidates."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Batched fit returned {actual} models for {expected} candidates")


class PersistenceError(TuningError):
    """Base exception for artifact persistence errors."""

    _action = "Persisting"

    def __init__(self, path: str | Path, reason: str, identity: str | None = None):
        self.path = str(path)
        self.reason = reason
        self.identity = identity
        super().__init__(f"{self._action} '{self.path}' failed: {reason}")


class PersistenceWriteError(PersistenceError):
    """Raised when an artifact cannot be written completely."""

    _action = "Writing"


class PersistenceReadError(PersistenceError):
    """Raised when an artifact cannot be read back."""

    _action = "Reading"


__all__ = [
    "TuningError",
    "ConfigurationError",
    "CandidateCountMismatchError",
    "PersistenceError",
    "PersistenceWriteError",
    "PersistenceReadError",
]
