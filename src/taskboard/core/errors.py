# src/taskboard/core/errors.py

from __future__ import annotations

"""
Error kinds surfaced by the controller layer.

- ValidationError: local, raised before any network call.
- TransportError: network/HTTP failure from the API client (never retried).
- PartialBulkFailure: a bulk delete aborted on its first failing id.
"""

from collections.abc import Sequence


class TaskboardError(Exception):
    """Base class for all taskboard errors."""


class ValidationError(TaskboardError):
    """User input rejected locally; message is meant to be shown verbatim."""


class TransportError(TaskboardError):
    """Request failed in transit or the backend answered with an HTTP error."""

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        super().__init__(message or "Request failed")
        self.message = message
        self.status_code = status_code


class PartialBulkFailure(TransportError):
    """
    Bulk delete stopped at the first failing id.

    Ids before the failure are gone from the backend, the failing id and
    everything after it were left untouched.
    """

    def __init__(
        self,
        *,
        deleted: Sequence[str],
        failed_id: str,
        remaining: Sequence[str],
        cause: TransportError,
    ) -> None:
        super().__init__(cause.message, status_code=cause.status_code)
        self.deleted = list(deleted)
        self.failed_id = failed_id
        self.remaining = list(remaining)
        self.cause = cause

    def __str__(self) -> str:
        detail = self.cause.message or "request failed"
        return (
            f"Deleted {len(self.deleted)} task(s); failed on {self.failed_id} ({detail}); "
            f"{len(self.remaining)} not attempted."
        )


def describe_error(err: Exception, default: str) -> str:
    """User-facing line for an error (message if the backend gave one, else default)."""
    if isinstance(err, PartialBulkFailure):
        return str(err)
    if isinstance(err, TransportError):
        return (err.message or "").strip() or default
    msg = str(err).strip()
    return msg or default
