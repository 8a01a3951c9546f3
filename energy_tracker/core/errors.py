"""
Domain error taxonomy.

Services raise these; the FastAPI exception handler registered in
``energy_tracker.main`` renders them as ``{"error", "type", "retryable"}``.
"""
from __future__ import annotations

from typing import Any


class EnergyTrackerError(Exception):
    status_code = 500
    error_type = "internal_error"
    retryable = False

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "error": self.message,
            "type": self.error_type,
            "retryable": self.retryable,
        }
        if self.details:
            body["details"] = self.details
        return body


class InputValidationError(EnergyTrackerError):
    """Malformed caller input (month, year, rate, backup payload)."""

    status_code = 400
    error_type = "invalid_input"


class InsufficientDataError(EnergyTrackerError):
    """Not enough history to compute a result. Soft: converted into a payload."""

    status_code = 200
    error_type = "insufficient_data"


class DataIntegrityError(EnergyTrackerError):
    """A stored record cannot be used for computation."""

    status_code = 422
    error_type = "data_integrity_error"


class ComputationError(EnergyTrackerError):
    status_code = 500
    error_type = "computation_error"


class UpstreamUnavailableError(EnergyTrackerError):
    """The key-value store or the LLM collaborator failed or timed out."""

    status_code = 503
    error_type = "upstream_unavailable"

    def __init__(self, message: str, retryable: bool = True, **details: Any) -> None:
        super().__init__(message, **details)
        self.retryable = retryable
