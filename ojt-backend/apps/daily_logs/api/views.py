from django.conf import settings
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.core.pagination import OJTPageNumberPagination
from apps.core.services import get_request_user
from apps.daily_logs.api.serializers import (
    DailyLogSerializer,
    DailyLogSubmitSerializer,
    HourProgressSerializer,
)
from apps.daily_logs.services import (
    delete_daily_log,
    get_owned_log,
    hour_progress,
    list_daily_logs,
    submit_daily_log,
)


class DailyLogPagination(OJTPageNumberPagination):
    page_size = settings.OJT_DAILY_LOG_PAGE_SIZE


class DailyLogViewSet(viewsets.ModelViewSet):
    """Daily logs are created and deleted; there is no edit path."""

    serializer_class = DailyLogSerializer
    pagination_class = DailyLogPagination
    http_method_names = ["get", "post", "delete", "head", "options"]
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        user = get_request_user(self.request)
        return list_daily_logs(user, search=self.request.query_params.get("search", ""))

    def get_object(self):
        return get_owned_log(get_request_user(self.request), self.kwargs["pk"])

    def create(self, request, *args, **kwargs):
        serializer = DailyLogSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        log = submit_daily_log(
            get_request_user(request),
            date_raw=serializer.validated_data["date"],
            hours_raw=serializer.validated_data["hours_worked"],
            notes=serializer.validated_data.get("notes", ""),
            audio_url=serializer.validated_data.get("audio_url", ""),
        )
        return Response(DailyLogSerializer(log).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        delete_daily_log(get_request_user(request), kwargs["pk"])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def progress(self, request):
        return Response(HourProgressSerializer(hour_progress(get_request_user(request))).data)
