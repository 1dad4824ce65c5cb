from rest_framework import serializers
from .models import Course

class CourseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Course
        fields = ["id","code","name","credit_units","created_at"]
        read_only_fields = ["created_at"]

    def to_internal_value(self, data):
        # normaliser avant le UniqueValidator: 'cs101' doit heurter 'CS101'
        code = data.get("code") if hasattr(data, "get") else None
        if isinstance(code, str):
            data = data.copy()
            data["code"] = code.strip().upper()
        return super().to_internal_value(data)

class CourseMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = Course
        fields = ["id", "code", "name", "credit_units"]
