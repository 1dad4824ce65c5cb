from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import HasCapability
from students.models import Student
from .models import CGPARecord
from .rules import grade_for_score
from .serializers import (
    CGPARecordSerializer, CGPAComputeSerializer, SemesterComputeSerializer, GradePreviewSerializer
)
from .services import append_cgpa_record, append_semester_cgpa_records, analyze_student_cgpa


class GradePreviewView(APIView):
    """GET /api/grading/grade/?score=72.5 -> {"grade": "A", "grade_point": 4.0}"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        ser = GradePreviewSerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        score = ser.validated_data["score"]
        grade, grade_point = grade_for_score(score)
        return Response({"score": float(score), "grade": grade, "grade_point": float(grade_point)})


class CGPARecordViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = CGPARecord.objects.select_related("student", "semester").order_by(
        "student__matricule", "semester__start_date"
    )
    serializer_class = CGPARecordSerializer
    permission_classes = [HasCapability]
    capability = "cgpa"
    filterset_fields = ["student", "semester"]

    @action(detail=False, methods=["post"])
    def compute(self, request):
        ser = CGPAComputeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        record = append_cgpa_record(ser.validated_data["student"].id, ser.validated_data["semester"].id)
        return Response(CGPARecordSerializer(record).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="compute-semester")
    def compute_semester(self, request):
        """Ajoute les CGPARecord manquants de tous les étudiants notés sur ce semestre."""
        ser = SemesterComputeSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = append_semester_cgpa_records(ser.validated_data["semester"].id)
        return Response(result, status=status.HTTP_201_CREATED if result["created"] else status.HTTP_200_OK)


class CGPAAnalysisView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        student_id = request.query_params.get("student")
        if not student_id:
            return Response({"detail": "student is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            data = analyze_student_cgpa(student_id)
        except (Student.DoesNotExist, DjangoValidationError):
            # ValidationError: uuid mal formé
            return Response({"detail": "Student not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(data)
