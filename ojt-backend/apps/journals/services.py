import logging
from datetime import date, timedelta

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import QuerySet

from apps.core.exceptions import DuplicateWeek, InvalidInput, NotFound, PermissionDenied
from apps.core.services import storage_error_from

from .models import WeeklyJournal

logger = logging.getLogger(__name__)


def week_bounds(anchor: date) -> tuple[date, date]:
    start = anchor - timedelta(days=anchor.weekday())
    try:
        return start, start + timedelta(days=6)
    except OverflowError:
        raise InvalidInput("Date is out of range") from None


def require_week_start(week_start: date) -> date:
    if week_start.weekday() != 0:
        raise InvalidInput("week_start_date must be a Monday")
    week_bounds(week_start)
    return week_start


def get_journal_for_week(user, week_start: date) -> WeeklyJournal | None:
    try:
        return WeeklyJournal.objects.filter(owner=user, week_start_date=week_start).first()
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc


def get_owned_journal(user, journal_id) -> WeeklyJournal:
    try:
        journal = WeeklyJournal.objects.filter(id=journal_id).first()
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc
    if journal is None:
        raise NotFound("The journal no longer exists or you do not have access to it.")
    if journal.owner_id != user.id:
        logger.warning(
            "JOURNAL_OWNERSHIP_MISMATCH journal_id=%s expected_user=%s actual_user=%s",
            journal_id,
            user.id,
            journal.owner_id,
        )
        raise PermissionDenied("Permission denied: This journal belongs to another user")
    return journal


def save_journal(user, week_start: date, text: str, existing_id=None) -> WeeklyJournal:
    """Insert or update the journal for one week, chosen by whether an id is supplied.

    With ``existing_id`` the row is updated in place and keeps its id; without
    it a new row is inserted and a second journal for the same week is refused
    with ``DuplicateWeek``.
    """
    require_week_start(week_start)
    if not (text or "").strip():
        raise InvalidInput("Please enter your journal reflection")

    if existing_id is not None:
        journal = get_owned_journal(user, existing_id)
        if journal.week_start_date != week_start:
            raise InvalidInput("This journal belongs to a different week")
        journal.journal_text = text
        try:
            journal.save(update_fields=["journal_text", "updated_at"])
        except DatabaseError as exc:
            raise storage_error_from(exc) from exc
        logger.info("JOURNAL_UPDATED user_id=%s journal_id=%s week_start=%s", user.id, journal.id, week_start)
        return journal

    try:
        with transaction.atomic():
            journal = WeeklyJournal.objects.create(
                owner=user,
                week_start_date=week_start,
                journal_text=text,
            )
    except IntegrityError as exc:
        logger.info("JOURNAL_REJECTED reason=duplicate_week user_id=%s week_start=%s", user.id, week_start)
        raise DuplicateWeek() from exc
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc

    logger.info("JOURNAL_CREATED user_id=%s journal_id=%s week_start=%s", user.id, journal.id, week_start)
    return journal


def list_journals(user, search: str = "") -> QuerySet[WeeklyJournal]:
    queryset = WeeklyJournal.objects.filter(owner=user)
    search = (search or "").strip()
    if search:
        queryset = queryset.filter(journal_text__icontains=search)
    return queryset.order_by("-week_start_date")


def delete_journal(user, journal_id):
    journal = get_owned_journal(user, journal_id)
    try:
        WeeklyJournal.objects.filter(id=journal.id, owner=user).delete()
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc
    logger.info("JOURNAL_DELETED user_id=%s journal_id=%s", user.id, journal.id)
