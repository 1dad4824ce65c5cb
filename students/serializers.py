# students/serializers.py
from rest_framework import serializers
from .models import Student

class StudentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Student
        fields = [
            "id","matricule","first_name","last_name","email","phone_number",
            "program","year_of_study","created_at","updated_at",
        ]
        read_only_fields = ["created_at","updated_at"]

    def validate_phone_number(self, value):
        value = value.strip()
        digits = value[1:] if value.startswith("+") else value
        if not digits.isdigit() or len(digits) < 7:
            raise serializers.ValidationError("Enter a valid phone number (digits, optional leading '+').")
        return value

class StudentMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = Student
        fields = ["id","matricule","first_name","last_name"]
