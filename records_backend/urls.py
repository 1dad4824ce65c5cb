from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("accounts.urls")),
    path("api/", include("core.urls")),
    path("api/", include("students.urls")),
    path("api/", include("courses.urls")),
    path("api/", include("results.urls")),
    path("api/", include("grading.urls")),
    path("api/", include("notifications.urls")),
    path("api/", include("analytics.urls")),
    path("api/", include("reports.urls")),
]
