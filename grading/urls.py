from django.urls import path
from rest_framework.routers import DefaultRouter
from .views import GradePreviewView, CGPARecordViewSet, CGPAAnalysisView

router = DefaultRouter()
router.register(r"grading/cgpa-records", CGPARecordViewSet, basename="cgpa-records")

urlpatterns = [
    path("grading/grade/", GradePreviewView.as_view(), name="grading-grade"),
    path("grading/analysis/", CGPAAnalysisView.as_view(), name="grading-analysis"),
] + router.urls
