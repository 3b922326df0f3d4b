from rest_framework import serializers

from apps.profiles.models import Profile


class ProfileSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Profile
        fields = [
            "full_name",
            "program",
            "theme",
            "email",
            "updated_at",
        ]
        read_only_fields = ["theme", "email", "updated_at"]


class ProfileUpdateSerializer(serializers.Serializer):
    full_name = serializers.CharField(allow_blank=True)
    program = serializers.CharField(required=False, allow_blank=True, default="")


class ThemeRequestSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=["toggle", "os_change"])
    os_prefers_dark = serializers.BooleanField(required=False, default=False)
    # OS preference the client last reported; os_change compares against it.
    previous_os_prefers_dark = serializers.BooleanField(required=False, allow_null=True, default=None)
