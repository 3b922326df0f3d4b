from rest_framework import serializers

from apps.journals.models import WeeklyJournal


class WeeklyJournalSerializer(serializers.ModelSerializer):
    week_end_date = serializers.DateField(read_only=True)
    word_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = WeeklyJournal
        fields = [
            "id",
            "week_start_date",
            "week_end_date",
            "journal_text",
            "word_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class JournalSaveRequestSerializer(serializers.Serializer):
    week_start_date = serializers.DateField()
    journal_text = serializers.CharField(allow_blank=True, trim_whitespace=False)
    journal_id = serializers.IntegerField(required=False, allow_null=True)


class JournalSaveResponseSerializer(serializers.Serializer):
    state = serializers.CharField()
    created = serializers.BooleanField()
    journal = WeeklyJournalSerializer()
