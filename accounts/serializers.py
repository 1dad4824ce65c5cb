from rest_framework import serializers
from django.contrib.auth import get_user_model

from .permissions import ROLE_CAPABILITIES

User = get_user_model()

class MeSerializer(serializers.ModelSerializer):
    capabilities = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id","username","first_name","last_name","email","role","is_superuser","capabilities"]

    def get_capabilities(self, obj):
        if obj.is_superuser:
            return sorted(ROLE_CAPABILITIES["ADMIN"])
        return sorted(ROLE_CAPABILITIES.get(obj.role, set()))
