from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/", include("apps.authn.api.urls")),
    path("api/", include("apps.profiles.api.urls")),
    path("api/", include("apps.daily_logs.api.urls")),
    path("api/", include("apps.journals.api.urls")),
    path("api/summaries/", include("apps.summaries.api.urls")),
    path("api/core/", include("apps.core.api.urls")),
]
