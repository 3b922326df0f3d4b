from rest_framework import serializers

from apps.daily_logs.models import DailyLog


class DailyLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = DailyLog
        fields = [
            "id",
            "date",
            "hours_worked",
            "notes",
            "audio_url",
            "created_at",
        ]
        read_only_fields = fields


class DailyLogSubmitSerializer(serializers.Serializer):
    # Raw values; parsing and range checks belong to admission control.
    date = serializers.CharField(required=False, allow_blank=True, default="")
    hours_worked = serializers.CharField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    audio_url = serializers.URLField(required=False, allow_blank=True, default="", max_length=500)


class HourProgressSerializer(serializers.Serializer):
    total_hours = serializers.DecimalField(max_digits=7, decimal_places=2)
    hour_cap = serializers.DecimalField(max_digits=7, decimal_places=2)
    remaining_hours = serializers.DecimalField(max_digits=7, decimal_places=2)
    percent_complete = serializers.DecimalField(max_digits=4, decimal_places=1)
