from django.contrib import admin

from apps.daily_logs.models import DailyLog


@admin.register(DailyLog)
class DailyLogAdmin(admin.ModelAdmin):
    list_display = ("id", "owner", "date", "hours_worked", "created_at")
    list_filter = ("date",)
    search_fields = ("notes", "owner__email")
    readonly_fields = ("created_at",)
