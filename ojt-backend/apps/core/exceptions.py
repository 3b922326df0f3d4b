from decimal import Decimal

from rest_framework import status
from rest_framework.exceptions import APIException


class OJTError(APIException):
    """Base for tracker errors raised from the service layer."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be completed."
    default_code = "ojt_error"

    def extras(self) -> dict:
        return {}


class InvalidInput(OJTError):
    default_detail = "Invalid input."
    default_code = "invalid_input"


class AdmissionError(OJTError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "admission_error"


class QuotaExceeded(AdmissionError):
    default_code = "quota_exceeded"

    def __init__(self, remaining: Decimal, cap: Decimal):
        self.remaining = remaining
        self.cap = cap
        super().__init__(
            f"This entry would exceed the {format_hours(cap)} hour limit. "
            f"You have {format_hours(remaining)} hours remaining."
        )

    def extras(self) -> dict:
        return {"remaining_hours": float(self.remaining)}


class DuplicateDate(AdmissionError):
    default_detail = "You already have an entry for this date."
    default_code = "duplicate_date"


class DuplicateWeek(OJTError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A journal already exists for this week."
    default_code = "duplicate_week"


class StorageError(OJTError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "The data store could not complete the request."
    default_code = "storage_error"


class ProviderError(OJTError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_code = "provider_error"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to generate summary: {reason}")


class PermissionDenied(OJTError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Permission denied: this record belongs to another user."
    default_code = "permission_denied"


class NotFound(OJTError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "The record no longer exists or you do not have access to it."
    default_code = "not_found"


class NothingToSummarize(OJTError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "No daily logs found for this week"
    default_code = "nothing_to_summarize"


class InvalidTransition(OJTError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "invalid_transition"


def format_hours(value) -> str:
    """Render an hour amount the way the UI shows it: 2, 2.5, 7.25."""
    return f"{float(value):g}"
