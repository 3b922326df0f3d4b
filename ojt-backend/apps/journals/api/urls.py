from rest_framework.routers import SimpleRouter

from .views import WeeklyJournalViewSet

router = SimpleRouter(trailing_slash=False)
router.register("journals", WeeklyJournalViewSet, basename="journal")

urlpatterns = router.urls
