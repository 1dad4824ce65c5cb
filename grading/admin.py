from django.contrib import admin
from .models import CGPARecord
# Register your models here.

@admin.register(CGPARecord)
class CGPARecordAdmin(admin.ModelAdmin):
    list_display = ("student", "semester", "semester_gpa", "cumulative_gpa", "total_credit_units")
    list_filter = ("semester",)
    search_fields = ("student__matricule", "student__last_name", "student__first_name")
