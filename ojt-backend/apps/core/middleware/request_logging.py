import json
import logging
import time

from django.conf import settings


logger = logging.getLogger("ojt.api")

REDACTED_FIELDS = frozenset({"password", "new_password", "confirm_password", "refresh", "access"})
BODY_PREVIEW_LIMIT = 500
BODYLESS_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "DELETE"})


def redact(payload):
    if isinstance(payload, dict):
        return {key: "***" if key in REDACTED_FIELDS else value for key, value in payload.items()}
    return payload


class ApiRequestLoggingMiddleware:
    """One line per /api/ request and one per response, enabled by OJT_VERBOSE_API_LOGGING."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not self._should_log(request):
            return self.get_response(request)

        started = time.monotonic()
        logger.info(
            "API_REQUEST method=%s path=%s query=%s timezone=%s body=%s",
            request.method,
            request.path,
            request.META.get("QUERY_STRING", ""),
            request.META.get("HTTP_X_OJT_TIMEZONE", ""),
            self._extract_body_preview(request),
        )

        response = self.get_response(request)

        user = getattr(request, "user", None)
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "API_RESPONSE method=%s path=%s status=%s user_id=%s duration_ms=%s",
            request.method,
            request.path,
            response.status_code,
            user.id if user is not None and user.is_authenticated else None,
            int((time.monotonic() - started) * 1000),
        )
        return response

    @staticmethod
    def _should_log(request) -> bool:
        return bool(getattr(settings, "OJT_VERBOSE_API_LOGGING", False)) and request.path.startswith("/api/")

    @staticmethod
    def _extract_body_preview(request) -> str:
        if request.method in BODYLESS_METHODS:
            return ""

        raw = request.body.decode("utf-8", errors="ignore")
        if not raw:
            return ""
        try:
            rendered = json.dumps(redact(json.loads(raw)), ensure_ascii=True)
        except ValueError:
            # Not JSON: only the size is logged.
            return f"<non-json content_length={len(raw)}>"
        if len(rendered) > BODY_PREVIEW_LIMIT:
            return f"{rendered[:BODY_PREVIEW_LIMIT]}..."
        return rendered
