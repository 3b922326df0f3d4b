from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import MeView, PasswordUpdateView, RegisterView, SignInView, SignOutView

urlpatterns = [
    path("register", RegisterView.as_view(), name="auth-register"),
    path("login", SignInView.as_view(), name="auth-login"),
    path("refresh", TokenRefreshView.as_view(), name="token-refresh"),
    path("logout", SignOutView.as_view(), name="auth-logout"),
    path("me", MeView.as_view(), name="auth-me"),
    path("password", PasswordUpdateView.as_view(), name="auth-password"),
]
