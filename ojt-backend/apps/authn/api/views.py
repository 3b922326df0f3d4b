from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authn.api.serializers import (
    AuthUserSerializer,
    PasswordUpdateRequestSerializer,
    RegisterRequestSerializer,
    SignInRequestSerializer,
    SignOutRequestSerializer,
)
from apps.authn.services import (
    current_user_payload,
    register,
    sign_in,
    sign_out,
    update_password,
)


class RegisterView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = register(
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
            full_name=serializer.validated_data.get("full_name", ""),
            program=serializer.validated_data.get("program", ""),
        )
        return Response(
            AuthUserSerializer(current_user_payload(user)).data,
            status=status.HTTP_201_CREATED,
        )


class SignInView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = SignInRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tokens = sign_in(
            email=serializer.validated_data.get("email", ""),
            password=serializer.validated_data.get("password", ""),
        )
        return Response(
            {
                "access": tokens.access,
                "refresh": tokens.refresh,
                "user": AuthUserSerializer(current_user_payload(tokens.user)).data,
            }
        )


class SignOutView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = SignOutRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        sign_out(request.user, serializer.validated_data["refresh"])
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(AuthUserSerializer(current_user_payload(request.user)).data)


class PasswordUpdateView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = PasswordUpdateRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        update_password(
            request.user,
            new_password=serializer.validated_data["new_password"],
            confirm_password=serializer.validated_data.get("confirm_password"),
        )
        return Response({"updated": True})
