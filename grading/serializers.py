from decimal import Decimal

from rest_framework import serializers

from core.models import Semester
from students.models import Student
from results.models import Result
from .models import CGPARecord


class CGPARecordSerializer(serializers.ModelSerializer):
    student_matricule = serializers.CharField(source="student.matricule", read_only=True)
    semester_name = serializers.CharField(source="semester.name", read_only=True)
    semester_year = serializers.IntegerField(source="semester.year", read_only=True)

    class Meta:
        model = CGPARecord
        fields = [
            "id", "student", "student_matricule", "semester", "semester_name", "semester_year",
            "semester_gpa", "cumulative_gpa", "total_credit_units", "created_at",
        ]


class CGPAComputeSerializer(serializers.Serializer):
    """Calcul + ajout d'un CGPARecord pour (student, semester)."""
    student = serializers.PrimaryKeyRelatedField(queryset=Student.objects.all())
    semester = serializers.PrimaryKeyRelatedField(queryset=Semester.objects.all())

    def validate(self, attrs):
        student, semester = attrs["student"], attrs["semester"]
        if not Result.objects.filter(student=student, semester=semester).exists():
            raise serializers.ValidationError("Student has no results for this semester.")
        if CGPARecord.objects.filter(student=student, semester=semester).exists():
            raise serializers.ValidationError("CGPA record already exists for this student and semester.")
        return attrs


class SemesterComputeSerializer(serializers.Serializer):
    semester = serializers.PrimaryKeyRelatedField(queryset=Semester.objects.all())


class GradePreviewSerializer(serializers.Serializer):
    score = serializers.DecimalField(max_digits=5, decimal_places=2,
                                     min_value=Decimal("0"), max_value=Decimal("100"))
