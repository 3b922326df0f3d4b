import logging

from django.db import DatabaseError

from apps.core.exceptions import InvalidInput
from apps.core.services import storage_error_from

from .models import Profile
from .theme import ThemeState

logger = logging.getLogger(__name__)


def get_or_create_profile(user) -> Profile:
    try:
        profile, _ = Profile.objects.get_or_create(user=user)
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc
    return profile


def update_profile(user, full_name: str, program: str = "") -> Profile:
    full_name = (full_name or "").strip()
    if not full_name:
        raise InvalidInput("Full name is required")

    profile = get_or_create_profile(user)
    profile.full_name = full_name[:200]
    profile.program = (program or "").strip()[:200]
    try:
        profile.save(update_fields=["full_name", "program", "updated_at"])
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc
    logger.info("PROFILE_UPDATED user_id=%s", user.id)
    return profile


def theme_state_for(profile: Profile, os_prefers_dark: bool = False) -> ThemeState:
    def persist(theme: str):
        profile.theme = theme
        try:
            profile.save(update_fields=["theme", "updated_at"])
        except DatabaseError as exc:
            raise storage_error_from(exc) from exc
        logger.info("PROFILE_THEME_PERSISTED user_id=%s theme=%s", profile.user_id, theme)

    return ThemeState(persisted=profile.theme, os_prefers_dark=os_prefers_dark, persist=persist)
