import json
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django.http import HttpResponse
from django.test import RequestFactory
from django.utils import timezone

from apps.core.diagnostics import run_store_diagnostics
from apps.core.exceptions import QuotaExceeded, format_hours
from apps.core.middleware.request_logging import ApiRequestLoggingMiddleware
from apps.core.middleware.request_timezone import RequestTimezoneMiddleware
from apps.core.services import is_schema_mismatch

from conftest import WEEK_MONDAY


def test_format_hours():
    assert format_hours(Decimal("2.00")) == "2"
    assert format_hours(Decimal("7.50")) == "7.5"
    assert format_hours(500) == "500"


def test_quota_message():
    exc = QuotaExceeded(remaining=Decimal("2.00"), cap=Decimal("500"))

    assert str(exc.detail) == "This entry would exceed the 500 hour limit. You have 2 hours remaining."
    assert exc.extras() == {"remaining_hours": 2.0}


@pytest.mark.parametrize(
    "message, expected",
    [
        ("no such table: daily_logs", True),
        ('relation "weekly_journals" does not exist', True),
        ("connection refused", False),
    ],
)
def test_schema_mismatch_detection(message, expected):
    assert is_schema_mismatch(message) is expected


@pytest.mark.django_db
class TestDiagnostics:
    def test_healthy_for_signed_in_user(self, user, sample_week):
        report = run_store_diagnostics(user)

        assert report["healthy"] is True
        assert report["auth"] == {"ok": True, "user_id": user.id}
        assert set(report["tables"]) == {"daily_logs", "weekly_journals", "profiles"}
        assert report["tables"]["daily_logs"]["owned_rows"] == 3

    def test_unauthenticated_is_unhealthy(self):
        report = run_store_diagnostics(None)

        assert report["healthy"] is False
        assert report["auth"]["ok"] is False
        assert report["connection"]["ok"] is True

    def test_failing_table_is_reported(self, user):
        with patch("apps.daily_logs.models.DailyLog.objects.all", side_effect=DatabaseError("no such table: daily_logs")):
            report = run_store_diagnostics(user)

        assert report["healthy"] is False
        assert report["tables"]["daily_logs"] == {
            "table": "daily_logs",
            "ok": False,
            "error": "no such table: daily_logs",
        }
        assert report["tables"]["weekly_journals"]["ok"] is True

    def test_anonymous_caller_sees_no_row_counts(self, anon_client, user, other_user, make_log):
        make_log(user, WEEK_MONDAY, 4)
        make_log(other_user, WEEK_MONDAY, 6)

        tables = anon_client.get("/api/core/diagnostics").json()["tables"]

        assert tables["daily_logs"] == {"table": "daily_logs", "ok": True, "owned_rows": 0}
        assert all(result["owned_rows"] == 0 for result in tables.values())
        assert run_store_diagnostics(user)["tables"]["daily_logs"]["owned_rows"] == 1

    def test_diagnostics_endpoint(self, api_client, anon_client):
        assert api_client.get("/api/core/diagnostics").json()["healthy"] is True
        assert anon_client.get("/api/core/diagnostics").json()["healthy"] is False


@pytest.mark.django_db
class TestStorageErrors:
    def test_schema_mismatch_attaches_diagnostics(self, api_client):
        with patch(
            "apps.daily_logs.services.DailyLog.objects.filter",
            side_effect=DatabaseError("no such table: daily_logs"),
        ):
            response = api_client.post(
                "/api/daily-logs",
                {"date": "2024-05-06", "hours_worked": "8"},
                format="json",
            )

        assert response.status_code == 503
        body = response.json()
        assert body["code"] == "storage_error"
        assert body["detail"] == "no such table: daily_logs"
        assert "diagnostics" in body

    def test_other_storage_errors_have_no_diagnostics(self, api_client):
        with patch(
            "apps.daily_logs.services.DailyLog.objects.filter",
            side_effect=DatabaseError("server closed the connection unexpectedly"),
        ):
            response = api_client.get("/api/daily-logs/progress")

        assert response.status_code == 503
        assert "diagnostics" not in response.json()


class TestRequestTimezoneMiddleware:
    def _run(self, **headers):
        seen = {}

        def get_response(request):
            seen["timezone"] = timezone.get_current_timezone_name()
            seen["attr"] = request.ojt_timezone
            return HttpResponse()

        RequestTimezoneMiddleware(get_response)(RequestFactory().get("/api/daily-logs", **headers))
        return seen

    def test_activates_header_timezone(self):
        seen = self._run(HTTP_X_OJT_TIMEZONE="Asia/Manila")

        assert seen == {"timezone": "Asia/Manila", "attr": "Asia/Manila"}
        assert timezone.get_current_timezone_name() == timezone.get_default_timezone_name()

    def test_unknown_timezone_falls_back_to_default(self):
        seen = self._run(HTTP_X_OJT_TIMEZONE="Mars/Olympus_Mons")

        assert seen["attr"] is None
        assert seen["timezone"] == timezone.get_default_timezone_name()


class TestApiRequestLoggingMiddleware:
    def test_body_preview_redacts_credentials(self):
        request = RequestFactory().post(
            "/api/auth/login",
            data=json.dumps({"email": "trainee@example.com", "password": "secret123"}),
            content_type="application/json",
        )

        preview = ApiRequestLoggingMiddleware._extract_body_preview(request)

        assert json.loads(preview) == {"email": "trainee@example.com", "password": "***"}

    def test_logs_only_api_paths_when_enabled(self, settings):
        settings.OJT_VERBOSE_API_LOGGING = True
        factory = RequestFactory()

        assert ApiRequestLoggingMiddleware._should_log(factory.get("/api/daily-logs"))
        assert not ApiRequestLoggingMiddleware._should_log(factory.get("/admin/"))

        settings.OJT_VERBOSE_API_LOGGING = False
        assert not ApiRequestLoggingMiddleware._should_log(factory.get("/api/daily-logs"))
