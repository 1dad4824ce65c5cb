import logging
from django.core.exceptions import ValidationError
from django.http import HttpResponse, Http404
from django.urls import reverse
from django.views.generic import TemplateView

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from accounts.permissions import RequiresCapability
from students.models import Student
from .models import StatementToken
from .services import compute_student_statement, build_pdf_html, render_pdf_from_html, sha1_bytes

logger = logging.getLogger(__name__)


class StudentStatementPreviewView(APIView):
    """GET /api/reports/statement/preview/?student=<id> -> payload JSON (sans PDF)"""

    def get(self, request):
        student_id = request.query_params.get("student")
        if not student_id:
            return Response({"detail": "student is required"}, status=status.HTTP_400_BAD_REQUEST)
        try:
            payload = compute_student_statement(student_id)
        except (Student.DoesNotExist, ValidationError):
            return Response({"detail": "Student not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(payload)


class StudentStatementPDFView(APIView):
    """GET /api/reports/statement/?student=<id> -> PDF + token de vérification"""
    permission_classes = [RequiresCapability]
    capability = "reports"

    def get(self, request):
        student_id = request.GET.get("student")
        if not student_id:
            return Response({"detail": "student is required"}, status=400)
        try:
            payload = compute_student_statement(student_id)
        except (Student.DoesNotExist, ValidationError):
            return Response({"detail": "Student not found"}, status=404)

        token = StatementToken.objects.create(student_id=payload["student"]["id"], payload=payload)
        verify_url = request.build_absolute_uri(reverse("statement-verify", args=[str(token.uid)]))
        html = build_pdf_html(payload, verify_url)
        pdf = render_pdf_from_html(html)
        token.pdf_sha1 = sha1_bytes(pdf)
        token.save(update_fields=["pdf_sha1"])
        logger.info("Statement %s generated for %s", token.uid, payload["student"]["matricule"])

        filename = f"{payload['student']['matricule']}_statement.pdf"
        resp = HttpResponse(pdf, content_type="application/pdf")
        resp["Content-Disposition"] = f'inline; filename="{filename}"'
        return resp


class StatementVerifyPage(TemplateView):
    """Page publique (QR code du relevé)."""
    template_name = "reports/verify.html"

    def get(self, request, uid):
        try:
            token = StatementToken.objects.select_related("student").get(uid=uid)
        except StatementToken.DoesNotExist:
            raise Http404("Unknown statement UID")
        totals = token.payload.get("totals", {})
        ctx = {
            "valid": token.valid,
            "student": {
                "matricule": token.student.matricule,
                "name": token.student.full_name,
                "program": token.student.program,
            },
            "cgpa": totals.get("cgpa"),
            "classification": totals.get("classification", ""),
            "created_at": token.created_at,
            "pdf_sha1": token.pdf_sha1,
        }
        return self.render_to_response(ctx)
