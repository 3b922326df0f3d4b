from django.urls import path

from .views import GenerateSummaryView, SaveSummaryView, WeekSummaryView

urlpatterns = [
    path("week", WeekSummaryView.as_view(), name="summary-week"),
    path("generate", GenerateSummaryView.as_view(), name="summary-generate"),
    path("save", SaveSummaryView.as_view(), name="summary-save"),
]
