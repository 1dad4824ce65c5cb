import logging

from django.conf import settings
from django.db import connection, DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.views import APIView
from .serializers import MeSerializer

logger = logging.getLogger(__name__)

class MeView(APIView):
    permission_classes = [IsAuthenticated]
    def get(self, request):
        return Response(MeSerializer(request.user).data)

class HealthView(APIView):
    """Ping base + transport SMS configuré (pas d'envoi)."""
    permission_classes = [AllowAny]

    def get(self, request):
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
        except DatabaseError as exc:
            logger.error("Health check: database unreachable: %s", exc)
            return Response({"status": "degraded", "database": "unreachable"},
                            status=status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response({
            "status": "ok",
            "database": "ok",
            "sms_transport": settings.SMS_TRANSPORT.rsplit(".", 1)[-1],
        })
