"""Custom exception hierarchy for barangay."""

from __future__ import annotations


class BarangayError(Exception):
    """Base exception for all barangay errors."""


class BarangayConfigError(BarangayError):
    """Invalid or missing configuration."""


class BackingStoreError(BarangayError):
    """Key-value store failure (unreachable, command error)."""

    def __init__(
        self,
        message: str,
        *,
        key: str = "",
    ) -> None:
        self.key = key
        super().__init__(message)


class CorruptRecordError(BackingStoreError):
    """A stored value is not valid JSON or does not parse as a profile."""


class HealthCheckError(BarangayError):
    """Ping round trip to the backing store failed."""


class ProfileValidationError(BarangayError):
    """Payload values failed model validation.

    Raised for values with the wrong type or range (e.g. a negative
    demographic counter).  Missing required fields on creation are
    checked by the HTTP layer and never reach the store.
    """

    def __init__(self, message: str, *, errors: list[dict[str, object]] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)
