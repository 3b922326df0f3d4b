import logging

from django.conf import settings
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.services import get_request_user, local_today, parse_iso_date
from apps.journals.api.views import run_journal_save
from apps.summaries.api.serializers import (
    SummaryGenerateRequestSerializer,
    SummarySaveRequestSerializer,
    WeekWindowSerializer,
)
from apps.summaries.services import SummaryMode, compute_week, generate_summary


logger = logging.getLogger("ojt.api")


class WeekSummaryView(APIView):
    def get(self, request):
        raw_anchor = request.query_params.get("anchor")
        anchor = parse_iso_date(raw_anchor, field="anchor") if raw_anchor else local_today()

        window = compute_week(get_request_user(request), anchor)
        return Response(WeekWindowSerializer(window).data)


class GenerateSummaryView(APIView):
    def post(self, request):
        serializer = SummaryGenerateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = get_request_user(request)
        mode = serializer.validated_data["mode"]
        provider = None
        if mode == SummaryMode.AI:
            provider = serializer.validated_data.get("provider") or settings.OJT_DEFAULT_SUMMARY_PROVIDER

        window = compute_week(user, serializer.validated_data.get("anchor") or local_today())
        text = generate_summary(window, mode=mode, provider=provider)

        logger.info(
            "SUMMARY_READY user_id=%s week_start=%s mode=%s provider=%s",
            user.id,
            window.week_start,
            mode,
            provider,
        )
        return Response(
            {
                "week_start": window.week_start,
                "week_end": window.week_end,
                "mode": mode,
                "provider": provider,
                "summary": text,
                "journal_id": window.existing_journal.id if window.existing_journal else None,
            }
        )


class SaveSummaryView(APIView):
    def post(self, request):
        serializer = SummarySaveRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return run_journal_save(
            get_request_user(request),
            week_start=serializer.validated_data["week_start"],
            text=serializer.validated_data["text"],
            journal_id=serializer.validated_data.get("journal_id"),
        )
