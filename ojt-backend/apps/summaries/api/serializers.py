from rest_framework import serializers

from apps.journals.api.serializers import WeeklyJournalSerializer
from apps.summaries.providers import SummaryProviderName
from apps.summaries.services import SummaryMode


class DaySlotSerializer(serializers.Serializer):
    date = serializers.DateField()
    label = serializers.CharField()
    hours = serializers.DecimalField(max_digits=4, decimal_places=2)
    notes = serializers.CharField(allow_blank=True)
    has_log = serializers.BooleanField()
    log_id = serializers.IntegerField(allow_null=True)


class WeekWindowSerializer(serializers.Serializer):
    week_start = serializers.DateField()
    week_end = serializers.DateField()
    date_range = serializers.CharField()
    total_hours = serializers.DecimalField(source="total", max_digits=5, decimal_places=2)
    days = DaySlotSerializer(many=True)
    previous_anchor = serializers.DateField()
    next_anchor = serializers.DateField()
    journal = WeeklyJournalSerializer(source="existing_journal", allow_null=True)


class SummaryGenerateRequestSerializer(serializers.Serializer):
    anchor = serializers.DateField(required=False)
    mode = serializers.ChoiceField(choices=SummaryMode.choices, default=SummaryMode.AI)
    provider = serializers.ChoiceField(choices=SummaryProviderName.choices, required=False)


class SummarySaveRequestSerializer(serializers.Serializer):
    week_start = serializers.DateField()
    text = serializers.CharField(allow_blank=True, trim_whitespace=False)
    journal_id = serializers.IntegerField(required=False, allow_null=True)
