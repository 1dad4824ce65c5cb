from django.urls import path
from .views import summary, course_stats_view

urlpatterns = [
    path("analytics/summary/", summary, name="analytics-summary"),
    path("analytics/courses/<uuid:course_id>/stats/", course_stats_view, name="analytics-course-stats"),
]
