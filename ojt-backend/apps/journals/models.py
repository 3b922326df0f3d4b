from datetime import timedelta

from django.conf import settings
from django.db import models


class WeeklyJournal(models.Model):
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="weekly_journals",
    )
    week_start_date = models.DateField()
    journal_text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "weekly_journals"
        ordering = ["-week_start_date"]
        constraints = [
            models.UniqueConstraint(
                fields=["owner", "week_start_date"],
                name="weekly_journals_unique_owner_week",
            ),
        ]

    def __str__(self):
        return f"Week of {self.week_start_date}"

    @property
    def week_end_date(self):
        return self.week_start_date + timedelta(days=6)

    @property
    def word_count(self) -> int:
        return len((self.journal_text or "").split())
