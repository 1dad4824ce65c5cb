from django.contrib import admin
from results.models import Result
from .models import Student
# Register your models here.

class ResultInline(admin.TabularInline):
    model = Result
    extra = 0
    fields = ("course", "semester", "score", "grade", "grade_point", "notified")
    readonly_fields = ("grade", "grade_point", "notified")

@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("matricule","last_name","first_name","program","year_of_study","phone_number")
    list_filter = ("program","year_of_study")
    search_fields = ("matricule","last_name","first_name","email")
    inlines = [ResultInline]
