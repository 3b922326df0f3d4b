from rest_framework import serializers


class RegisterRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, allow_blank=True)
    full_name = serializers.CharField(required=False, allow_blank=True, default="")
    program = serializers.CharField(required=False, allow_blank=True, default="")


class SignInRequestSerializer(serializers.Serializer):
    email = serializers.CharField(required=False, allow_blank=True, default="")
    password = serializers.CharField(required=False, allow_blank=True, default="", write_only=True)


class SignOutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class PasswordUpdateRequestSerializer(serializers.Serializer):
    new_password = serializers.CharField(allow_blank=True, write_only=True)
    confirm_password = serializers.CharField(required=False, allow_blank=True, write_only=True)


class AuthUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.CharField(allow_blank=True)
    created_at = serializers.DateTimeField()
    full_name = serializers.CharField(allow_blank=True)
    program = serializers.CharField(allow_blank=True)


class SignInResponseSerializer(serializers.Serializer):
    access = serializers.CharField()
    refresh = serializers.CharField()
    user = AuthUserSerializer()
