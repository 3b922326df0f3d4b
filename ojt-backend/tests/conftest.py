from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.daily_logs.models import DailyLog
from apps.profiles.models import Profile


User = get_user_model()

# Monday 6 May 2024 .. Sunday 12 May 2024
WEEK_MONDAY = date(2024, 5, 6)


def create_user(email: str, password: str = "secret123", full_name: str = ""):
    user = User.objects.create_user(username=email, email=email, password=password)
    Profile.objects.create(user=user, full_name=full_name, program="BS Information Technology")
    return user


@pytest.fixture
def user(db):
    return create_user("trainee@example.com", full_name="Ana Reyes")


@pytest.fixture
def other_user(db):
    return create_user("other@example.com", full_name="Ben Cruz")


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def make_log():
    def _make_log(owner, day: date, hours, notes: str = "") -> DailyLog:
        return DailyLog.objects.create(owner=owner, date=day, hours_worked=Decimal(str(hours)), notes=notes)

    return _make_log


@pytest.fixture
def sample_week(user, make_log):
    """Mon=4h, Wed=6h, Fri=5h in the week of WEEK_MONDAY."""
    return [
        make_log(user, WEEK_MONDAY, 4, "Onboarding and environment setup"),
        make_log(user, WEEK_MONDAY + timedelta(days=2), 6, ""),
        make_log(user, WEEK_MONDAY + timedelta(days=4), 5, "Wrote unit tests for the billing module"),
    ]


@pytest.fixture
def hours_logged_to(user):
    """Fill a user's history up to an exact total with full and partial days in 2023."""

    def _fill(total) -> Decimal:
        remaining = Decimal(str(total))
        day = date(2023, 1, 2)
        logs = []
        while remaining > 0:
            hours = min(remaining, Decimal("24"))
            logs.append(DailyLog(owner=user, date=day, hours_worked=hours))
            remaining -= hours
            day += timedelta(days=1)
        DailyLog.objects.bulk_create(logs)
        return Decimal(str(total))

    return _fill
