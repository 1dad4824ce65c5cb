# results/views.py
from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.decorators import action

from accounts.permissions import HasCapability
from .models import Result
from .serializers import ResultSerializer, ResultDetailSerializer, BulkResultsUpsertSerializer

class ResultViewSet(viewsets.ModelViewSet):
    queryset = Result.objects.select_related("student","course","semester")
    serializer_class = ResultSerializer
    permission_classes = [HasCapability]
    capability = "results"
    filterset_fields = ["student","course","semester","notified","grade"]

    def get_serializer_class(self):
        # list/retrieve → serializer enrichi (matricule, cours, semestre)
        if self.action in ("list","retrieve"):
            return ResultDetailSerializer
        return ResultSerializer

    @action(detail=False, methods=["get"])
    def recent(self, request):
        """5 derniers résultats saisis (tableau de bord)."""
        qs = self.get_queryset().order_by("-created_at")[:5]
        return Response(ResultDetailSerializer(qs, many=True).data)

    @action(detail=False, methods=["post"], url_path="bulk")
    def bulk(self, request, *args, **kwargs):
        """Upsert de notes pour un (cours, semestre)."""
        ser = BulkResultsUpsertSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = ser.save()
        return Response(result, status=status.HTTP_200_OK)
