from rest_framework import viewsets, filters
from rest_framework.response import Response
from rest_framework.decorators import action
from django_filters.rest_framework import DjangoFilterBackend
from accounts.permissions import HasCapability
from results.models import Result
from results.serializers import ResultDetailSerializer
from .models import Course
from .serializers import CourseSerializer

class CourseViewSet(viewsets.ModelViewSet):
    queryset = Course.objects.all()
    serializer_class = CourseSerializer
    permission_classes = [HasCapability]
    capability = "courses"
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ["code","credit_units"]
    search_fields = ["code","name"]

    @action(detail=True, methods=["get"])
    def results(self, request, pk=None):
        """Résultats de ce cours (option ?semester=<id>)"""
        course = self.get_object()
        qs = (Result.objects
              .filter(course=course)
              .select_related("student","course","semester")
              .order_by("student__matricule"))
        semester = request.query_params.get("semester")
        if semester:
            qs = qs.filter(semester_id=semester)
        return Response(ResultDetailSerializer(qs, many=True).data)
