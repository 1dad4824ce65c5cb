from django.urls import path
from rest_framework.routers import DefaultRouter
from .views import (
    PendingNotificationsView, SendNotificationView, SendPendingNotificationsView, NotificationLogViewSet
)

router = DefaultRouter()
router.register(r"notifications/logs", NotificationLogViewSet, basename="notification-logs")

urlpatterns = [
    path("notifications/pending/", PendingNotificationsView.as_view(), name="notifications-pending"),
    path("notifications/send/<uuid:result_id>/", SendNotificationView.as_view(), name="notifications-send"),
    path("notifications/send-pending/", SendPendingNotificationsView.as_view(), name="notifications-send-pending"),
] + router.urls
