from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="DailyLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("hours_worked", models.DecimalField(decimal_places=2, max_digits=4)),
                ("notes", models.TextField(blank=True)),
                ("audio_url", models.URLField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=models.CASCADE,
                        related_name="daily_logs",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "daily_logs",
                "ordering": ["-date"],
            },
        ),
        migrations.AddConstraint(
            model_name="dailylog",
            constraint=models.UniqueConstraint(fields=("owner", "date"), name="daily_logs_unique_owner_date"),
        ),
        migrations.AddConstraint(
            model_name="dailylog",
            constraint=models.CheckConstraint(
                condition=models.Q(("hours_worked__gt", 0), ("hours_worked__lte", 24)),
                name="daily_logs_hours_in_range",
            ),
        ),
    ]
