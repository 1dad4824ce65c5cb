from django.contrib import admin
from .models import NotificationLog
# Register your models here.

@admin.register(NotificationLog)
class NotificationLogAdmin(admin.ModelAdmin):
    list_display = ("created_at", "phone_number", "status", "transport_ref", "result")
    list_filter = ("status",)
    search_fields = ("phone_number", "message", "result__student__matricule")
    readonly_fields = ("result", "phone_number", "message", "status", "transport_ref", "error", "created_at")
