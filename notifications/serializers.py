from rest_framework import serializers
from results.serializers import ResultDetailSerializer
from .models import NotificationLog
from .services import render_message


class PendingNotificationSerializer(ResultDetailSerializer):
    phone_number = serializers.CharField(source="student.phone_number", read_only=True)
    message = serializers.SerializerMethodField()

    class Meta(ResultDetailSerializer.Meta):
        fields = ResultDetailSerializer.Meta.fields + ["phone_number", "message"]

    def get_message(self, obj):
        return render_message(obj)


class NotificationLogSerializer(serializers.ModelSerializer):
    student_name = serializers.SerializerMethodField()

    class Meta:
        model = NotificationLog
        fields = ["id","result","student_name","phone_number","message","status","transport_ref","error","created_at"]

    def get_student_name(self, obj):
        return obj.result.student.full_name if obj.result_id else ""
