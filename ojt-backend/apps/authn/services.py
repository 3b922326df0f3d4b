import logging
from dataclasses import dataclass

from django.contrib.auth import authenticate, get_user_model
from django.db import DatabaseError, IntegrityError, transaction
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.core.exceptions import InvalidInput
from apps.core.services import storage_error_from
from apps.profiles.models import Profile
from apps.profiles.services import get_or_create_profile


logger = logging.getLogger(__name__)
User = get_user_model()

MIN_PASSWORD_LENGTH = 6


@dataclass
class SessionTokens:
    access: str
    refresh: str
    user: object


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _issue_tokens(user) -> SessionTokens:
    refresh = RefreshToken.for_user(user)
    return SessionTokens(access=str(refresh.access_token), refresh=str(refresh), user=user)


def _check_password_rules(password: str):
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def register(email: str, password: str, full_name: str = "", program: str = ""):
    email = _normalize_email(email)
    if not email or not password:
        raise InvalidInput("Please enter both email and password")
    _check_password_rules(password)

    try:
        with transaction.atomic():
            if User.objects.filter(username=email).exists():
                raise InvalidInput("An account with this email already exists")
            user = User.objects.create_user(username=email, email=email, password=password)
            Profile.objects.create(
                user=user,
                full_name=(full_name or "").strip()[:200],
                program=(program or "").strip()[:200],
            )
    except IntegrityError as exc:
        raise InvalidInput("An account with this email already exists") from exc
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc

    logger.info("AUTH_REGISTERED user_id=%s", user.id)
    return user


def sign_in(email: str, password: str) -> SessionTokens:
    email = _normalize_email(email)
    if not email or not password:
        raise InvalidInput("Please enter both email and password")

    user = authenticate(username=email, password=password)
    if user is None:
        logger.info("AUTH_SIGN_IN_FAILED email=%s", email)
        raise AuthenticationFailed("Invalid login credentials")

    logger.info("AUTH_SIGNED_IN user_id=%s", user.id)
    return _issue_tokens(user)


def sign_out(user, refresh_token: str):
    try:
        token = RefreshToken(refresh_token)
        if str(token.get("user_id")) != str(user.id):
            raise AuthenticationFailed("Refresh token does not belong to this session")
        token.blacklist()
    except TokenError as exc:
        raise AuthenticationFailed("Invalid or expired refresh token") from exc
    logger.info("AUTH_SIGNED_OUT user_id=%s", user.id)


def current_user_payload(user) -> dict:
    profile = get_or_create_profile(user)
    return {
        "id": user.id,
        "email": user.email,
        "created_at": user.date_joined,
        "full_name": profile.full_name,
        "program": profile.program,
    }


def update_password(user, new_password: str, confirm_password: str | None = None):
    _check_password_rules(new_password)
    if confirm_password is not None and new_password != confirm_password:
        raise InvalidInput("Passwords do not match")

    user.set_password(new_password)
    try:
        user.save(update_fields=["password"])
    except DatabaseError as exc:
        raise storage_error_from(exc) from exc
    logger.info("AUTH_PASSWORD_UPDATED user_id=%s", user.id)
