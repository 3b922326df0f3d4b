from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
import logging
import time

from django.conf import settings
from django.db import models

from apps.core.exceptions import InvalidInput, NothingToSummarize, format_hours
from apps.daily_logs.services import logs_between
from apps.journals.models import WeeklyJournal
from apps.journals.services import get_journal_for_week, week_bounds
from apps.summaries.providers import SummaryProvider, get_provider


logger = logging.getLogger(__name__)


class SummaryMode(models.TextChoices):
    MANUAL = "manual", "Manual"
    AI = "ai", "AI"


def _shift(day: date, days: int) -> date | None:
    # None past the first or last representable week.
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return None


@dataclass
class DaySlot:
    date: date
    hours: Decimal = Decimal("0")
    notes: str = ""
    has_log: bool = False
    log_id: int | None = None

    @property
    def label(self) -> str:
        return f"{self.date:%a}, {self.date:%b} {self.date.day}"


@dataclass
class WeekWindow:
    week_start: date
    week_end: date
    days: list[DaySlot] = field(default_factory=list)
    total: Decimal = Decimal("0")
    existing_journal: WeeklyJournal | None = None

    @property
    def date_range(self) -> str:
        start, end = self.week_start, self.week_end
        return f"{start:%B} {start.day} - {end:%B} {end.day}, {end.year}"

    @property
    def previous_anchor(self) -> date | None:
        return _shift(self.week_start, -7)

    @property
    def next_anchor(self) -> date | None:
        anchor = _shift(self.week_start, 7)
        # The following week has to end inside the calendar too.
        if anchor is None or _shift(anchor, 6) is None:
            return None
        return anchor


def compute_week(user, anchor: date) -> WeekWindow:
    week_start, week_end = week_bounds(anchor)
    logs_by_date = {log.date: log for log in logs_between(user, week_start, week_end)}

    days = []
    total = Decimal("0")
    for offset in range(7):
        day = week_start + timedelta(days=offset)
        log = logs_by_date.get(day)
        if log is None:
            days.append(DaySlot(date=day))
            continue
        days.append(
            DaySlot(
                date=day,
                hours=log.hours_worked,
                notes=log.notes or "",
                has_log=True,
                log_id=log.id,
            )
        )
        total += log.hours_worked

    window = WeekWindow(
        week_start=week_start,
        week_end=week_end,
        days=days,
        total=total,
        existing_journal=get_journal_for_week(user, week_start),
    )
    logger.info(
        "WEEK_COMPUTED user_id=%s week_start=%s total=%s logged_days=%s has_journal=%s",
        user.id,
        week_start,
        total,
        len(logs_by_date),
        window.existing_journal is not None,
    )
    return window


def week_context(window: WeekWindow) -> dict:
    return {
        "week_start": window.week_start.isoformat(),
        "week_end": window.week_end.isoformat(),
        "date_range": window.date_range,
        "total_hours": float(window.total),
        "days": [
            {
                "date": slot.date.isoformat(),
                "weekday": f"{slot.date:%A}",
                "hours": float(slot.hours),
                "notes": slot.notes,
                "has_log": slot.has_log,
            }
            for slot in window.days
        ],
    }


def render_manual_summary(window: WeekWindow) -> str:
    lines = [
        f"Weekly Summary: {window.date_range}",
        "",
        f"Total Hours: {window.total:.2f}",
        "",
        "Daily Activities:",
        "",
    ]
    for slot in window.days:
        if not slot.has_log:
            continue
        lines.append(f"{slot.label} - {format_hours(slot.hours)} hours")
        if slot.notes.strip():
            lines.append(f"Activities: {slot.notes}")
        lines.append("")
    return "\n".join(lines) + "\n"


def generate_summary(window: WeekWindow, mode: str, provider: str | SummaryProvider | None = None) -> str:
    if window.total <= 0:
        raise NothingToSummarize()

    if mode == SummaryMode.MANUAL:
        return render_manual_summary(window)
    if mode != SummaryMode.AI:
        raise InvalidInput(f"Unknown summary mode: {mode}")

    if not isinstance(provider, SummaryProvider):
        provider = get_provider(provider or settings.OJT_DEFAULT_SUMMARY_PROVIDER)

    started = time.monotonic()
    text = provider.generate(week_context(window))
    logger.info(
        "SUMMARY_GENERATED provider=%s week_start=%s duration_ms=%s chars=%s",
        provider.name,
        window.week_start,
        int((time.monotonic() - started) * 1000),
        len(text),
    )
    return text
