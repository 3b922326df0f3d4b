from django.urls import path

from apps.core.api.views import StoreDiagnosticsView

urlpatterns = [
    path("diagnostics", StoreDiagnosticsView.as_view(), name="store-diagnostics"),
]
