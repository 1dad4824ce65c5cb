from django.urls import path
from .views import StudentStatementPreviewView, StudentStatementPDFView, StatementVerifyPage

urlpatterns = [
    path("reports/statement/preview/", StudentStatementPreviewView.as_view(), name="statement-preview"),
    path("reports/statement/", StudentStatementPDFView.as_view(), name="statement-pdf"),
    path("reports/verify/<uuid:uid>/", StatementVerifyPage.as_view(), name="statement-verify"),
]
