import logging

from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.diagnostics import run_store_diagnostics

logger = logging.getLogger("ojt.api")


class StoreDiagnosticsView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        report = run_store_diagnostics(getattr(request, "user", None))
        if not report["healthy"]:
            logger.warning(
                "STORE_DIAGNOSTICS_UNHEALTHY path=%s connection_ok=%s auth_ok=%s",
                request.path,
                report["connection"]["ok"],
                report["auth"]["ok"],
            )
        return Response(report)
