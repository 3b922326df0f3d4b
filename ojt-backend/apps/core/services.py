from datetime import date

from django.db import DatabaseError
from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework.exceptions import NotAuthenticated

from apps.core.exceptions import InvalidInput, StorageError


SCHEMA_MISMATCH_MARKERS = ("no such table", "no such column", "does not exist")


def get_request_user(request):
    if hasattr(request, "user") and request.user and request.user.is_authenticated:
        return request.user
    raise NotAuthenticated()


def local_today() -> date:
    return timezone.localdate()


def parse_iso_date(value, field: str = "date") -> date:
    if isinstance(value, date):
        return value
    raw = (value or "").strip() if isinstance(value, str) else ""
    if not raw:
        raise InvalidInput(f"Please enter a {field}.")
    try:
        parsed = parse_date(raw)
    except ValueError:
        parsed = None
    if parsed is None:
        raise InvalidInput(f"Invalid {field}: expected YYYY-MM-DD.")
    return parsed


def storage_error_from(exc: DatabaseError) -> StorageError:
    return StorageError(str(exc) or exc.__class__.__name__)


def is_schema_mismatch(message: str) -> bool:
    lowered = (message or "").lower()
    return any(marker in lowered for marker in SCHEMA_MISMATCH_MARKERS)
