import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.utils import timezone


logger = logging.getLogger("ojt.api")

TIMEZONE_HEADER = "HTTP_X_OJT_TIMEZONE"


def resolve_timezone(name: str) -> ZoneInfo | None:
    name = (name or "").strip()
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("INVALID_TIMEZONE_HEADER value=%s", name)
        return None


class RequestTimezoneMiddleware:
    """Resolve "today" in the trainee's zone.

    The future-date check on daily logs and the default summary week both use
    the local date. Clients send it as an IANA name in ``X-OJT-Timezone``;
    without a usable header ``TIME_ZONE`` applies.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        tz = resolve_timezone(request.META.get(TIMEZONE_HEADER, ""))
        request.ojt_timezone = tz.key if tz is not None else None

        if tz is None:
            timezone.deactivate()
        else:
            timezone.activate(tz)
        try:
            return self.get_response(request)
        finally:
            timezone.deactivate()
