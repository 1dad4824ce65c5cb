import uuid
from django.db import models
from results.models import Result

# Create your models here.
class NotificationLog(models.Model):
    """Une ligne par tentative d'envoi (succès ou échec)."""
    class Status(models.TextChoices):
        SENT = "SENT"
        FAILED = "FAILED"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    result = models.ForeignKey(Result, on_delete=models.SET_NULL, null=True, blank=True, related_name="notification_logs")
    phone_number = models.CharField(max_length=32)
    message = models.TextField()
    status = models.CharField(max_length=8, choices=Status.choices)
    transport_ref = models.CharField(max_length=128, blank=True)
    error = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.status} -> {self.phone_number} ({self.created_at:%Y-%m-%d %H:%M})"
