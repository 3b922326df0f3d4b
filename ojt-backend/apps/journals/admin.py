from django.contrib import admin

from apps.journals.models import WeeklyJournal


@admin.register(WeeklyJournal)
class WeeklyJournalAdmin(admin.ModelAdmin):
    list_display = ("id", "owner", "week_start_date", "updated_at")
    list_filter = ("week_start_date",)
    search_fields = ("journal_text", "owner__email")
    readonly_fields = ("created_at", "updated_at")
