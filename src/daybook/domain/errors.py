"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested entry or day does not exist."""


class StorageError(DomainError):
    """Reading or writing persisted ledger data failed.

    Missing files are never reported this way; they mean "no data yet".
    """


class RateFetchError(DomainError):
    """The remote exchange rate could not be obtained."""


def row_not_found(row: int, day: date) -> str:
    """Return message for a missing displayed row."""
    return f"No entry at row {row} on {day.isoformat()}"


def storage_failure(action: str, path: object, error: Exception) -> str:
    """Return message for a failed file operation."""
    return f"Failed to {action} {path}: {error}"


def rate_unavailable(from_currency: str, to_currency: str, reason: str) -> str:
    """Return message when the rate service gives no usable answer."""
    return f"Could not fetch {from_currency}->{to_currency} rate: {reason}"
