from django.contrib import admin
from .models import Result
# Register your models here.

@admin.register(Result)
class ResultAdmin(admin.ModelAdmin):
    list_display = ("student", "course", "semester", "score", "grade", "grade_point", "notified")
    list_filter = ("semester", "course", "grade", "notified")
    search_fields = ("student__matricule", "student__last_name", "course__code", "course__name")
    readonly_fields = ("grade", "grade_point", "notified", "created_at", "updated_at")
