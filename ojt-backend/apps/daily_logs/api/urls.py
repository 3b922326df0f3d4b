from rest_framework.routers import SimpleRouter

from .views import DailyLogViewSet

router = SimpleRouter(trailing_slash=False)
router.register("daily-logs", DailyLogViewSet, basename="daily-log")

urlpatterns = router.urls
