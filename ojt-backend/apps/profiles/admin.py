from django.contrib import admin

from apps.profiles.models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "full_name", "program", "theme", "updated_at")
    search_fields = ("full_name", "program", "user__email")
    readonly_fields = ("updated_at",)
