from django.contrib import admin
from .models import StatementToken
# Register your models here.

@admin.register(StatementToken)
class StatementTokenAdmin(admin.ModelAdmin):
    list_display = ("uid","student","created_at","valid")
    list_filter = ("valid",)
    search_fields = ("student__matricule","student__last_name","student__first_name")
