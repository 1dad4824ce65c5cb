from django.contrib import admin
from .models import Course
# Register your models here.

@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "credit_units")
    list_filter = ("credit_units",)
    search_fields = ("code", "name")
