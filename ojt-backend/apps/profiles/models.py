from django.conf import settings
from django.db import models


class ThemePreference(models.TextChoices):
    SYSTEM = "", "Follow system"
    LIGHT = "light", "Light"
    DARK = "dark", "Dark"


class Profile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    full_name = models.CharField(max_length=200, blank=True)
    program = models.CharField(max_length=200, blank=True)
    theme = models.CharField(
        max_length=8,
        choices=ThemePreference.choices,
        default=ThemePreference.SYSTEM,
        blank=True,
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "profiles"

    def __str__(self):
        return f"Profile<{self.user_id}>"
