from datetime import date, timedelta
from decimal import Decimal

import pytest

from apps.core.exceptions import (
    DuplicateDate,
    InvalidInput,
    NotFound,
    PermissionDenied,
    QuotaExceeded,
)
from apps.daily_logs.models import DailyLog
from apps.daily_logs.services import (
    delete_daily_log,
    hour_progress,
    list_daily_logs,
    parse_hours,
    submit_daily_log,
    total_hours_for_user,
)

from conftest import WEEK_MONDAY

TODAY = date(2024, 5, 20)


class TestParseHours:
    @pytest.mark.parametrize("raw, expected", [("8", Decimal("8")), ("0.5", Decimal("0.5")), (24, Decimal("24")), ("7.5", Decimal("7.5"))])
    def test_accepts_half_hour_values_in_range(self, raw, expected):
        assert parse_hours(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "-1", "24.5", "abc", "nan", "inf", "7.25", "1_0", "1e1", "8 hours", True])
    def test_rejects_invalid_values(self, raw):
        with pytest.raises(InvalidInput):
            parse_hours(raw)


@pytest.mark.django_db
class TestSubmitDailyLog:
    def test_valid_submission_increases_total_by_hours(self, user, make_log):
        make_log(user, WEEK_MONDAY, 8)
        before = total_hours_for_user(user)

        log = submit_daily_log(user, "2024-05-07", "7.5", notes="Pair programming", today=TODAY)

        assert log.pk is not None
        assert log.hours_worked == Decimal("7.5")
        assert log.notes == "Pair programming"
        assert total_hours_for_user(user) == before + Decimal("7.5")

    def test_missing_date_or_hours(self, user):
        with pytest.raises(InvalidInput, match="both date and hours"):
            submit_daily_log(user, "", "8", today=TODAY)
        with pytest.raises(InvalidInput, match="both date and hours"):
            submit_daily_log(user, "2024-05-07", "", today=TODAY)

    def test_malformed_or_future_date(self, user):
        with pytest.raises(InvalidInput):
            submit_daily_log(user, "07/05/2024", "8", today=TODAY)
        with pytest.raises(InvalidInput):
            submit_daily_log(user, "2024-02-30", "8", today=TODAY)
        with pytest.raises(InvalidInput, match="future"):
            submit_daily_log(user, (TODAY + timedelta(days=1)).isoformat(), "8", today=TODAY)
        assert DailyLog.objects.count() == 0

    def test_today_is_accepted(self, user):
        log = submit_daily_log(user, TODAY.isoformat(), "4", today=TODAY)
        assert log.date == TODAY

    def test_quota_exceeded_reports_remaining(self, user, hours_logged_to):
        hours_logged_to(498)

        with pytest.raises(QuotaExceeded) as excinfo:
            submit_daily_log(user, "2024-05-07", "3", today=TODAY)

        assert excinfo.value.remaining == Decimal("2")
        assert "You have 2 hours remaining" in str(excinfo.value.detail)
        assert total_hours_for_user(user) == Decimal("498")

    def test_exactly_reaching_the_cap_is_allowed(self, user, hours_logged_to):
        hours_logged_to(492)

        submit_daily_log(user, "2024-05-07", "8", today=TODAY)

        assert total_hours_for_user(user) == Decimal("500")

    def test_duplicate_date_rejected(self, user, make_log):
        make_log(user, WEEK_MONDAY, 4)

        with pytest.raises(DuplicateDate):
            submit_daily_log(user, WEEK_MONDAY.isoformat(), "2", today=TODAY)

    def test_duplicate_date_wins_over_quota(self, user, hours_logged_to):
        hours_logged_to(499)
        existing_day = date(2023, 1, 2)

        with pytest.raises(DuplicateDate):
            submit_daily_log(user, existing_day.isoformat(), "8", today=TODAY)

    def test_same_date_for_different_users_is_fine(self, user, other_user, make_log):
        make_log(other_user, WEEK_MONDAY, 4)

        log = submit_daily_log(user, WEEK_MONDAY.isoformat(), "4", today=TODAY)

        assert log.owner == user

    def test_quota_is_per_user(self, user, other_user, make_log):
        for offset in range(21):
            make_log(other_user, date(2023, 3, 1) + timedelta(days=offset), 24)

        log = submit_daily_log(user, "2024-05-07", "8", today=TODAY)

        assert log.pk is not None


@pytest.mark.django_db
class TestLogQueries:
    def test_progress(self, user, make_log):
        make_log(user, WEEK_MONDAY, 8)
        make_log(user, WEEK_MONDAY + timedelta(days=1), 4.5)

        progress = hour_progress(user)

        assert progress["total_hours"] == Decimal("12.5")
        assert progress["remaining_hours"] == Decimal("487.5")
        assert progress["percent_complete"] == Decimal("2.5")

    def test_list_is_newest_first_and_searchable(self, user, other_user, make_log):
        make_log(user, WEEK_MONDAY, 4, "Database migration")
        make_log(user, WEEK_MONDAY + timedelta(days=1), 4, "Code review")
        make_log(other_user, WEEK_MONDAY, 4, "database backups")

        dates = [log.date for log in list_daily_logs(user)]
        assert dates == [WEEK_MONDAY + timedelta(days=1), WEEK_MONDAY]

        matches = list(list_daily_logs(user, search="DATABASE"))
        assert [log.notes for log in matches] == ["Database migration"]

    def test_delete_own_log(self, user, make_log):
        log = make_log(user, WEEK_MONDAY, 4)

        delete_daily_log(user, log.id)

        assert not DailyLog.objects.filter(id=log.id).exists()

    def test_delete_foreign_log_is_denied(self, user, other_user, make_log):
        log = make_log(other_user, WEEK_MONDAY, 4)

        with pytest.raises(PermissionDenied):
            delete_daily_log(user, log.id)
        assert DailyLog.objects.filter(id=log.id).exists()

    def test_delete_missing_log(self, user):
        with pytest.raises(NotFound):
            delete_daily_log(user, 9999)


@pytest.mark.django_db
class TestDailyLogApi:
    def test_requires_authentication(self, anon_client):
        response = anon_client.get("/api/daily-logs")
        assert response.status_code == 401

    def test_submit_and_list(self, api_client):
        response = api_client.post(
            "/api/daily-logs",
            {"date": "2024-05-06", "hours_worked": "8", "notes": "Sprint planning"},
            format="json",
        )
        assert response.status_code == 201
        assert response.json()["hours_worked"] == 8.0

        response = api_client.get("/api/daily-logs")
        body = response.json()
        assert response.status_code == 200
        assert body["count"] == 1
        assert body["total_pages"] == 1
        assert body["results"][0]["notes"] == "Sprint planning"

    def test_pagination_ten_per_page(self, api_client, user, make_log):
        for offset in range(12):
            make_log(user, date(2024, 4, 1) + timedelta(days=offset), 1)

        first = api_client.get("/api/daily-logs").json()
        second = api_client.get("/api/daily-logs?page=2").json()

        assert first["total_pages"] == 2
        assert len(first["results"]) == 10
        assert len(second["results"]) == 2
        assert first["results"][0]["date"] == "2024-04-12"

    def test_quota_error_payload(self, api_client, hours_logged_to):
        hours_logged_to(498)

        response = api_client.post("/api/daily-logs", {"date": "2024-05-06", "hours_worked": "3"}, format="json")

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "quota_exceeded"
        assert body["remaining_hours"] == 2.0

    def test_duplicate_error_payload(self, api_client, user, make_log):
        make_log(user, WEEK_MONDAY, 4)

        response = api_client.post("/api/daily-logs", {"date": "2024-05-06", "hours_worked": "3"}, format="json")

        assert response.status_code == 409
        assert response.json()["code"] == "duplicate_date"

    def test_invalid_input_payload(self, api_client):
        response = api_client.post("/api/daily-logs", {"date": "2024-05-06", "hours_worked": "30"}, format="json")

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"

    def test_no_edit_path(self, api_client, user, make_log):
        log = make_log(user, WEEK_MONDAY, 4)

        response = api_client.patch(f"/api/daily-logs/{log.id}", {"hours_worked": "5"}, format="json")

        assert response.status_code == 405

    def test_delete_foreign_log_returns_diagnostics(self, api_client, other_user, make_log):
        log = make_log(other_user, WEEK_MONDAY, 4)

        response = api_client.delete(f"/api/daily-logs/{log.id}")

        assert response.status_code == 403
        body = response.json()
        assert body["code"] == "permission_denied"
        assert body["diagnostics"]["connection"]["ok"] is True
        assert "daily_logs" in body["diagnostics"]["tables"]

    def test_delete_own_log(self, api_client, user, make_log):
        log = make_log(user, WEEK_MONDAY, 4)

        response = api_client.delete(f"/api/daily-logs/{log.id}")

        assert response.status_code == 204
        assert not DailyLog.objects.filter(id=log.id).exists()

    def test_progress_endpoint(self, api_client, user, make_log):
        make_log(user, WEEK_MONDAY, 10)

        body = api_client.get("/api/daily-logs/progress").json()

        assert body["total_hours"] == 10.0
        assert body["hour_cap"] == 500.0
        assert body["remaining_hours"] == 490.0
        assert body["percent_complete"] == 2.0

    def test_missing_log_error_has_code(self, api_client):
        response = api_client.delete("/api/daily-logs/9999")

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_malformed_request_error_has_code(self, api_client):
        response = api_client.post(
            "/api/daily-logs",
            {"date": "2024-05-06", "hours_worked": "8", "audio_url": "not a url"},
            format="json",
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "invalid_input"
        assert "audio_url" in body["errors"]
