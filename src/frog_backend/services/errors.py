"""Error taxonomy shared by the post store and the tip ledger.

Every error carries the HTTP status it maps to; the API layer renders them as
``{"error": message}`` bodies.
"""

from __future__ import annotations

from fastapi import status


class TipError(RuntimeError):
    """Base exception for failures reported to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(TipError):
    """Raised when request fields are malformed. Never touches storage."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(TipError):
    """Raised when the referenced post does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class PayloadMismatch(TipError):
    """Raised when a transaction id is replayed with a different tip intent."""

    status_code = status.HTTP_409_CONFLICT


class VerificationFailed(TipError):
    """Raised when the chain transaction does not match the claimed tip."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, reason: str) -> None:
        super().__init__(f"tip tx verification failed: {reason}")
        self.reason = reason


class VerificationUnavailable(TipError):
    """Raised when the chain API cannot be reached or answers with an error.

    Rendered like a verification failure, but kept distinct because the
    caller may retry the same claim later.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, reason: str) -> None:
        super().__init__(f"tip tx verification unavailable: {reason}")
        self.reason = reason


class InternalError(TipError):
    """Raised on storage failures, including a failed compensating action."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
