"""Daily log admission control.

A submission is validated locally, then checked against the user's hour cap
and the one-entry-per-date rule before it is inserted. The three store round
trips are not serialized against concurrent submissions; the unique
constraint on (owner, date) backstops the duplicate check, the cap does not
have a store-level equivalent.
"""

import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import QuerySet, Sum

from apps.core.exceptions import (
    DuplicateDate,
    InvalidInput,
    NotFound,
    PermissionDenied,
    QuotaExceeded,
)
from apps.core.services import local_today, parse_iso_date, storage_error_from

from .models import DailyLog

logger = logging.getLogger(__name__)

MAX_HOURS_PER_DAY = Decimal("24")
HOURS_STEP = Decimal("0.5")
# Plain decimal notation; Decimal() alone would also take "1_0" or "1e1".
HOURS_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def hour_cap() -> Decimal:
    return Decimal(str(settings.OJT_HOUR_CAP))


def parse_hours(raw) -> Decimal:
    if isinstance(raw, bool):
        raise InvalidInput("Hours must be a number")
    text = str(raw).strip()
    if not HOURS_PATTERN.fullmatch(text):
        raise InvalidInput("Hours must be a number")
    try:
        hours = Decimal(text)
    except InvalidOperation:
        raise InvalidInput("Hours must be a number") from None
    if hours <= 0 or hours > MAX_HOURS_PER_DAY:
        raise InvalidInput("Hours must be a positive number between 0 and 24")
    if hours % HOURS_STEP != 0:
        raise InvalidInput("Hours must be entered in half-hour increments")
    return hours


def parse_log_date(raw, today: date | None = None) -> date:
    entry_date = parse_iso_date(raw)
    if entry_date > (today or local_today()):
        raise InvalidInput("Date cannot be in the future")
    return entry_date


def total_hours_for_user(user) -> Decimal:
    try:
        total = DailyLog.objects.filter(owner=user).aggregate(total=Sum("hours_worked"))["total"]
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc
    return total if total is not None else Decimal("0")


def hour_progress(user) -> dict:
    cap = hour_cap()
    total = total_hours_for_user(user)
    percent = min(total / cap * 100, Decimal("100")) if cap else Decimal("0")
    return {
        "total_hours": total,
        "hour_cap": cap,
        "remaining_hours": max(cap - total, Decimal("0")),
        "percent_complete": percent.quantize(Decimal("0.1")),
    }


def submit_daily_log(user, date_raw, hours_raw, notes: str = "", audio_url: str = "", today: date | None = None) -> DailyLog:
    if not date_raw or hours_raw is None or str(hours_raw).strip() == "":
        raise InvalidInput("Please enter both date and hours")

    entry_date = parse_log_date(date_raw, today=today)
    hours = parse_hours(hours_raw)

    cap = hour_cap()
    current_total = total_hours_for_user(user)

    try:
        # A duplicate date is reported even when the cap would also be exceeded.
        if DailyLog.objects.filter(owner=user, date=entry_date).exists():
            logger.info("DAILY_LOG_REJECTED reason=duplicate_date user_id=%s date=%s", user.id, entry_date)
            raise DuplicateDate()

        if current_total + hours > cap:
            logger.info(
                "DAILY_LOG_REJECTED reason=quota user_id=%s date=%s hours=%s total=%s",
                user.id,
                entry_date,
                hours,
                current_total,
            )
            raise QuotaExceeded(remaining=cap - current_total, cap=cap)

        with transaction.atomic():
            log = DailyLog.objects.create(
                owner=user,
                date=entry_date,
                hours_worked=hours,
                notes=(notes or "").strip(),
                audio_url=(audio_url or "").strip(),
            )
    except IntegrityError as exc:
        logger.warning("DAILY_LOG_CONSTRAINT_HIT user_id=%s date=%s error=%s", user.id, entry_date, exc)
        raise DuplicateDate() from exc
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc

    logger.info(
        "DAILY_LOG_ADMITTED user_id=%s log_id=%s date=%s hours=%s total=%s",
        user.id,
        log.id,
        log.date,
        hours,
        current_total + hours,
    )
    return log


def list_daily_logs(user, search: str = "") -> QuerySet[DailyLog]:
    queryset = DailyLog.objects.filter(owner=user)
    search = (search or "").strip()
    if search:
        queryset = queryset.filter(notes__icontains=search)
    return queryset.order_by("-date")


def logs_between(user, start: date, end: date) -> list[DailyLog]:
    try:
        return list(
            DailyLog.objects.filter(owner=user, date__gte=start, date__lte=end).order_by("date")
        )
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc


def get_owned_log(user, log_id) -> DailyLog:
    try:
        log = DailyLog.objects.filter(id=log_id).first()
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc
    if log is None:
        raise NotFound("The log no longer exists or you do not have access to it.")
    if log.owner_id != user.id:
        logger.warning(
            "DAILY_LOG_OWNERSHIP_MISMATCH log_id=%s expected_user=%s actual_user=%s",
            log_id,
            user.id,
            log.owner_id,
        )
        raise PermissionDenied("Permission denied: This log belongs to another user")
    return log


def delete_daily_log(user, log_id):
    log = get_owned_log(user, log_id)
    try:
        DailyLog.objects.filter(id=log.id, owner=user).delete()
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc
    logger.info("DAILY_LOG_DELETED user_id=%s log_id=%s date=%s", user.id, log.id, log.date)
