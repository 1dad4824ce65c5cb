from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import HasCapability
from results.models import Result
from .models import NotificationLog
from .serializers import PendingNotificationSerializer, NotificationLogSerializer
from .services import pending_results, send_result_notification, dispatch_pending
from .transports import TransportError


class PendingNotificationsView(APIView):
    """GET /api/notifications/pending/ -> résultats à notifier + aperçu du message"""
    permission_classes = [HasCapability]
    capability = "notifications"

    def get(self, request):
        return Response(PendingNotificationSerializer(pending_results(), many=True).data)


class SendNotificationView(APIView):
    """POST /api/notifications/send/<result_id>/"""
    permission_classes = [HasCapability]
    capability = "notifications"

    def post(self, request, result_id):
        result = get_object_or_404(Result.objects.select_related("student", "course", "semester"), id=result_id)
        if result.notified:
            return Response({"detail": "Result already notified"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            log = send_result_notification(result)
        except TransportError as exc:
            return Response({"detail": str(exc), "result": str(result.id)}, status=status.HTTP_502_BAD_GATEWAY)
        if log is None:
            return Response({"detail": "Sent; delivery log not recorded", "result": str(result.id)},
                            status=status.HTTP_200_OK)
        return Response(NotificationLogSerializer(log).data, status=status.HTTP_200_OK)


class SendPendingNotificationsView(APIView):
    """POST /api/notifications/send-pending/ -> {"succeeded": n, "failed": m, ...}"""
    permission_classes = [HasCapability]
    capability = "notifications"

    def post(self, request):
        summary = dispatch_pending()
        return Response(summary.as_dict(), status=status.HTTP_200_OK)


class NotificationLogViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = NotificationLog.objects.select_related("result__student").all()
    serializer_class = NotificationLogSerializer
    permission_classes = [HasCapability]
    capability = "notifications"
    filterset_fields = ["status", "result"]
