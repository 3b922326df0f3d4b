from django.conf import settings
from django.db import models


class DailyLog(models.Model):
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="daily_logs",
    )
    date = models.DateField()
    hours_worked = models.DecimalField(max_digits=4, decimal_places=2)
    notes = models.TextField(blank=True)
    audio_url = models.URLField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "daily_logs"
        ordering = ["-date"]
        constraints = [
            models.UniqueConstraint(fields=["owner", "date"], name="daily_logs_unique_owner_date"),
            models.CheckConstraint(
                condition=models.Q(hours_worked__gt=0) & models.Q(hours_worked__lte=24),
                name="daily_logs_hours_in_range",
            ),
        ]

    def __str__(self):
        return f"{self.date} ({self.hours_worked}h)"
