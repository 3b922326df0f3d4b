"""Store health probe used when a request fails with a permission or schema error.

The probe checks, in order, that the database connection opens, that the
acting user is authenticated, and that each tracker table can be read with an
owner-scoped query. Anonymous callers get no row counts. It never raises:
every failure is reported in the result.
"""

import logging

from django.apps import apps
from django.db import DatabaseError, connection

logger = logging.getLogger(__name__)

# (model label, owner lookup) per tracker table
TRACKED_TABLES = (
    ("daily_logs.DailyLog", "owner"),
    ("journals.WeeklyJournal", "owner"),
    ("profiles.Profile", "user"),
)


def _probe_connection() -> dict:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as exc:
        return {"ok": False, "vendor": connection.vendor, "error": str(exc)}
    return {"ok": True, "vendor": connection.vendor}


def _probe_auth(user) -> dict:
    authenticated = bool(user is not None and getattr(user, "is_authenticated", False))
    return {
        "ok": authenticated,
        "user_id": user.id if authenticated else None,
    }


def _probe_table(label: str, owner_field: str, user) -> dict:
    model = apps.get_model(label)
    table = model._meta.db_table
    try:
        queryset = model.objects.all()
        if user is not None and getattr(user, "is_authenticated", False):
            rows = queryset.filter(**{owner_field: user}).count()
        else:
            # Anonymous callers own nothing; only check that the table answers.
            queryset.filter(pk__isnull=True).exists()
            rows = 0
    except DatabaseError as exc:
        return {"table": table, "ok": False, "error": str(exc)}
    return {"table": table, "ok": True, "owned_rows": rows}


def run_store_diagnostics(user=None) -> dict:
    connection_result = _probe_connection()
    auth_result = _probe_auth(user)

    tables = {}
    if connection_result["ok"]:
        for label, owner_field in TRACKED_TABLES:
            result = _probe_table(label, owner_field, user)
            tables[result["table"]] = result

    healthy = (
        connection_result["ok"]
        and auth_result["ok"]
        and bool(tables)
        and all(result["ok"] for result in tables.values())
    )
    report = {
        "healthy": healthy,
        "connection": connection_result,
        "auth": auth_result,
        "tables": tables,
    }
    logger.info(
        "STORE_DIAGNOSTICS healthy=%s vendor=%s user_id=%s failing_tables=%s",
        healthy,
        connection_result.get("vendor"),
        auth_result.get("user_id"),
        [name for name, result in tables.items() if not result["ok"]],
    )
    return report
