from django.contrib import admin
from .models import Semester
# Register your models here.

@admin.register(Semester)
class SemesterAdmin(admin.ModelAdmin):
    list_display = ("name", "year", "start_date", "end_date", "is_current")
    list_filter  = ("year", "is_current")
    search_fields = ("name",)
