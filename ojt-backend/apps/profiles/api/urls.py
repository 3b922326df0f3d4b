from django.urls import path

from .views import ProfileView, ThemeView

urlpatterns = [
    path("profile", ProfileView.as_view(), name="profile"),
    path("profile/theme", ThemeView.as_view(), name="profile-theme"),
]
