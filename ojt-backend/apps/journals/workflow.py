import logging
from datetime import date

from django.db import models
from rest_framework.exceptions import APIException

from apps.core.exceptions import InvalidTransition

from .models import WeeklyJournal
from .services import get_journal_for_week, get_owned_journal, require_week_start, save_journal

logger = logging.getLogger(__name__)


class JournalEditState(models.TextChoices):
    NOT_LOADED = "not_loaded", "Not Loaded"
    LOADED = "loaded", "Loaded"
    EDITING = "editing", "Editing"
    SAVING = "saving", "Saving"
    SAVED = "saved", "Saved"
    FAILED = "failed", "Failed"


ALLOWED_TRANSITIONS = {
    JournalEditState.NOT_LOADED: {JournalEditState.LOADED},
    JournalEditState.LOADED: {JournalEditState.LOADED, JournalEditState.EDITING},
    JournalEditState.EDITING: {JournalEditState.EDITING, JournalEditState.SAVING},
    JournalEditState.SAVING: {JournalEditState.SAVED, JournalEditState.FAILED},
    JournalEditState.SAVED: {JournalEditState.LOADED},
    JournalEditState.FAILED: {JournalEditState.SAVING, JournalEditState.EDITING},
}


class JournalEditFlow:
    """Edit session for one user's journal in one week.

    NOT_LOADED -> LOADED -> EDITING -> SAVING -> SAVED | FAILED.
    SAVED returns to LOADED with the saved journal; FAILED retries the save or goes back to editing.
    """

    def __init__(self, user, week_start: date):
        self.user = user
        self.week_start = require_week_start(week_start)
        self.state = JournalEditState.NOT_LOADED
        self.journal: WeeklyJournal | None = None
        self.text = ""
        self.error: APIException | None = None
        self.created = False

    @property
    def has_journal(self) -> bool:
        return self.journal is not None

    def _move(self, target: JournalEditState):
        if target not in ALLOWED_TRANSITIONS[self.state]:
            raise InvalidTransition(f"Cannot move journal edit from {self.state.value} to {target.value}")
        self.state = target

    def load(self, existing_id=None) -> "JournalEditFlow":
        if existing_id is not None:
            journal = get_owned_journal(self.user, existing_id)
        else:
            journal = get_journal_for_week(self.user, self.week_start)
        self._move(JournalEditState.LOADED)
        self.journal = journal
        self.text = journal.journal_text if journal else ""
        return self

    def edit(self, text: str) -> "JournalEditFlow":
        self._move(JournalEditState.EDITING)
        self.text = text or ""
        return self

    def save(self) -> WeeklyJournal:
        self._move(JournalEditState.SAVING)
        existing_id = self.journal.id if self.journal else None
        try:
            journal = save_journal(self.user, self.week_start, self.text, existing_id=existing_id)
        except APIException as exc:
            self.error = exc
            self._move(JournalEditState.FAILED)
            logger.info(
                "JOURNAL_EDIT_FAILED user_id=%s week_start=%s error=%s",
                self.user.id,
                self.week_start,
                exc.__class__.__name__,
            )
            raise

        self.created = existing_id is None
        self.journal = journal
        self.error = None
        self._move(JournalEditState.SAVED)
        return journal

    def acknowledge(self) -> "JournalEditFlow":
        self._move(JournalEditState.LOADED)
        return self
