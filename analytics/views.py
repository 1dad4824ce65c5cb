from django.core.exceptions import ValidationError
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from courses.models import Course
from .services import build_summary, course_stats

# Create your views here.

@api_view(["GET"])
@permission_classes([IsAuthenticated])
def summary(request):
    return Response(build_summary())


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def course_stats_view(request, course_id):
    semester_id = request.GET.get("semester") or None
    try:
        data = course_stats(course_id, semester_id)
    except Course.DoesNotExist:
        return Response({"detail": "Course not found"}, status=404)
    except ValidationError:
        return Response({"detail": "semester must be a valid id"}, status=400)
    return Response(data)
