from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.decorators import action
from accounts.permissions import HasCapability
from .models import Semester
from .serializers import SemesterSerializer
# Create your views here.

class SemesterViewSet(viewsets.ModelViewSet):
    queryset = Semester.objects.all()
    serializer_class = SemesterSerializer
    permission_classes = [HasCapability]
    capability = "semesters"
    filterset_fields = ["year","is_current","name"]

    @action(detail=True, methods=["post"], url_path="set-current")
    def set_current(self, request, pk=None):
        """Marque ce semestre comme courant (les autres repassent à False)"""
        semester = self.get_object()
        semester.is_current = True
        semester.save(update_fields=["is_current"])
        return Response(SemesterSerializer(semester).data)

    @action(detail=False, methods=["get"])
    def current(self, request):
        semester = Semester.current()
        if not semester:
            return Response({"detail": "No current semester"}, status=status.HTTP_404_NOT_FOUND)
        return Response(SemesterSerializer(semester).data)
