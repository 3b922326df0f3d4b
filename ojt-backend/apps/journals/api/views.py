from django.conf import settings
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.core.pagination import OJTPageNumberPagination
from apps.core.services import get_request_user, local_today, parse_iso_date
from apps.journals.api.serializers import (
    JournalSaveRequestSerializer,
    JournalSaveResponseSerializer,
    WeeklyJournalSerializer,
)
from apps.journals.services import (
    delete_journal,
    get_journal_for_week,
    get_owned_journal,
    list_journals,
    require_week_start,
    week_bounds,
)
from apps.journals.workflow import JournalEditFlow


def run_journal_save(user, week_start, text: str, journal_id=None) -> Response:
    flow = JournalEditFlow(user, week_start).load(existing_id=journal_id)
    flow.edit(text)
    journal = flow.save()
    serializer = JournalSaveResponseSerializer(
        {"state": flow.state, "created": flow.created, "journal": journal}
    )
    return Response(
        serializer.data,
        status=status.HTTP_201_CREATED if flow.created else status.HTTP_200_OK,
    )


class JournalPagination(OJTPageNumberPagination):
    page_size = settings.OJT_JOURNAL_PAGE_SIZE


class WeeklyJournalViewSet(viewsets.ModelViewSet):
    serializer_class = WeeklyJournalSerializer
    pagination_class = JournalPagination
    http_method_names = ["get", "post", "delete", "head", "options"]
    lookup_value_regex = r"\d+"

    def get_queryset(self):
        user = get_request_user(self.request)
        return list_journals(user, search=self.request.query_params.get("search", ""))

    def get_object(self):
        return get_owned_journal(get_request_user(self.request), self.kwargs["pk"])

    def create(self, request, *args, **kwargs):
        serializer = JournalSaveRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return run_journal_save(
            get_request_user(request),
            week_start=serializer.validated_data["week_start_date"],
            text=serializer.validated_data["journal_text"],
            journal_id=serializer.validated_data.get("journal_id"),
        )

    def destroy(self, request, *args, **kwargs):
        delete_journal(get_request_user(request), kwargs["pk"])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def week(self, request):
        raw = request.query_params.get("week_start")
        if raw:
            week_start = require_week_start(parse_iso_date(raw, field="week_start"))
        else:
            week_start, _ = week_bounds(local_today())
        _, week_end = week_bounds(week_start)

        journal = get_journal_for_week(get_request_user(request), week_start)
        return Response(
            {
                "week_start_date": week_start,
                "week_end_date": week_end,
                "journal": WeeklyJournalSerializer(journal).data if journal else None,
            }
        )
