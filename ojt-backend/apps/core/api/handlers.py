import logging

from rest_framework.exceptions import ValidationError
from rest_framework.views import exception_handler

from apps.core.diagnostics import run_store_diagnostics
from apps.core.exceptions import InvalidInput, OJTError, PermissionDenied, StorageError
from apps.core.services import is_schema_mismatch

logger = logging.getLogger("ojt.api")

# Django exceptions DRF converts (Http404, PermissionDenied) carry no default_code.
FALLBACK_CODES = {403: "permission_denied", 404: "not_found"}


def _wants_diagnostics(exc) -> bool:
    if isinstance(exc, PermissionDenied):
        return True
    return isinstance(exc, StorageError) and is_schema_mismatch(str(exc.detail))


def _with_code(exc, response):
    if isinstance(exc, ValidationError):
        response.data = {
            "detail": "Invalid input.",
            "code": InvalidInput.default_code,
            "errors": response.data,
        }
    elif isinstance(response.data, dict):
        code = getattr(exc, "default_code", None) or FALLBACK_CODES.get(response.status_code, "error")
        response.data.setdefault("code", code)
    return response


def ojt_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return response
    if not isinstance(exc, OJTError):
        return _with_code(exc, response)

    request = context.get("request")
    user = getattr(request, "user", None)
    payload = {
        "detail": str(exc.detail),
        "code": exc.default_code,
    }
    payload.update(exc.extras())

    if _wants_diagnostics(exc):
        report = run_store_diagnostics(user)
        payload["diagnostics"] = report
        logger.warning(
            "OJT_ERROR_DIAGNOSED code=%s path=%s healthy=%s",
            exc.default_code,
            getattr(request, "path", ""),
            report["healthy"],
        )
    else:
        logger.info(
            "OJT_ERROR code=%s path=%s detail=%s",
            exc.default_code,
            getattr(request, "path", ""),
            str(exc.detail)[:200],
        )

    response.data = payload
    return response
