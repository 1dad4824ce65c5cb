# students/views.py
from rest_framework import viewsets, filters
from rest_framework.response import Response
from rest_framework.decorators import action
from django_filters.rest_framework import DjangoFilterBackend
from accounts.permissions import HasCapability
from results.models import Result
from results.serializers import ResultDetailSerializer
from .models import Student
from .serializers import StudentSerializer

class StudentViewSet(viewsets.ModelViewSet):
    queryset = Student.objects.all()
    serializer_class = StudentSerializer
    permission_classes = [HasCapability]
    capability = "students"
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ["program","year_of_study"]
    search_fields = ["matricule","last_name","first_name","email"]

    @action(detail=True, methods=["get"])
    def results(self, request, pk=None):
        student = self.get_object()
        qs = (Result.objects
              .filter(student=student)
              .select_related("student","course","semester")
              .order_by("semester__start_date","course__code"))
        return Response(ResultDetailSerializer(qs, many=True).data)
