from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.services import get_request_user
from apps.profiles.api.serializers import (
    ProfileSerializer,
    ProfileUpdateSerializer,
    ThemeRequestSerializer,
)
from apps.profiles.services import get_or_create_profile, theme_state_for, update_profile


class ProfileView(APIView):
    def get(self, request):
        profile = get_or_create_profile(get_request_user(request))
        return Response(ProfileSerializer(profile).data)

    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = update_profile(
            get_request_user(request),
            full_name=serializer.validated_data["full_name"],
            program=serializer.validated_data.get("program", ""),
        )
        return Response(ProfileSerializer(profile).data)


class ThemeView(APIView):
    @staticmethod
    def _os_prefers_dark(request) -> bool:
        return request.query_params.get("os_prefers_dark", "false").lower() == "true"

    def get(self, request):
        profile = get_or_create_profile(get_request_user(request))
        state = theme_state_for(profile, os_prefers_dark=self._os_prefers_dark(request))
        return Response(state.as_dict())

    def post(self, request):
        serializer = ThemeRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = get_or_create_profile(get_request_user(request))
        os_prefers_dark = serializer.validated_data["os_prefers_dark"]
        previous = serializer.validated_data["previous_os_prefers_dark"]
        if previous is None:
            previous = os_prefers_dark

        changes = []
        if serializer.validated_data["action"] == "toggle":
            state = theme_state_for(profile, os_prefers_dark=os_prefers_dark)
            state.subscribe(changes.append)
            state.toggle()
        else:
            state = theme_state_for(profile, os_prefers_dark=previous)
            state.subscribe(changes.append)
            state.os_preference_changed(os_prefers_dark)
        return Response({**state.as_dict(), "changed": bool(changes)})
