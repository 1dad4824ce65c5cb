import logging
from dataclasses import dataclass, field

from django.db import DatabaseError

from results.models import Result
from .models import NotificationLog
from .transports import TransportError, get_transport

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATE = (
    "Dear {first_name}, your {course_code} ({course_name}) result for "
    "{semester_name} {semester_year} is now available. "
    "Score: {score}% (Grade {grade}). Visit the portal for details."
)


@dataclass
class DispatchSummary:
    succeeded: int = 0
    failed: int = 0
    failed_ids: list = field(default_factory=list)

    @property
    def attempted(self):
        return self.succeeded + self.failed

    @property
    def detail(self):
        return f"{self.succeeded} succeeded, {self.failed} failed"

    def as_dict(self):
        return {
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "failed_ids": [str(i) for i in self.failed_ids],
            "detail": self.detail,
        }


def format_score(score):
    # 85.00 -> "85", 72.50 -> "72.5"
    text = f"{score:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def render_message(result: Result) -> str:
    return MESSAGE_TEMPLATE.format(
        first_name=result.student.first_name,
        course_code=result.course.code,
        course_name=result.course.name,
        semester_name=result.semester.name,
        semester_year=result.semester.year,
        score=format_score(result.score),
        grade=result.grade,
    )


def pending_results():
    """Résultats pas encore notifiés, les plus anciens d'abord."""
    return (Result.objects
            .filter(notified=False)
            .select_related("student", "course", "semester")
            .order_by("created_at", "id"))


def send_result_notification(result: Result, transport=None):
    """
    Envoie la notification d'un résultat.
    Succès: notified=True + log SENT. Échec transport: log FAILED, le flag reste
    False et l'erreur remonte à l'appelant (pas de retry).
    """
    transport = transport or get_transport()
    message = render_message(result)
    phone = result.student.phone_number

    try:
        ref = transport.send(phone, message)
    except TransportError as exc:
        logger.warning("SMS for result %s to %s failed: %s", result.id, phone, exc)
        NotificationLog.objects.create(
            result=result, phone_number=phone, message=message,
            status=NotificationLog.Status.FAILED, error=str(exc),
        )
        raise

    # Le flag passe avant le log: un log SENT perdu ne doit pas provoquer un renvoi.
    # Si mark_notified lui-même échoue, le résultat reste en attente et sera renvoyé.
    result.mark_notified()
    logger.info("SMS for result %s sent to %s (%s)", result.id, phone, ref)
    try:
        return NotificationLog.objects.create(
            result=result, phone_number=phone, message=message,
            status=NotificationLog.Status.SENT, transport_ref=ref or "",
        )
    except DatabaseError:
        logger.exception("SMS for result %s sent but its log row could not be written", result.id)
        return None


def dispatch_pending(transport=None) -> DispatchSummary:
    """
    Parcourt séquentiellement tous les résultats en attente.
    Un échec n'arrête pas le lot; relancer = rejouer l'opération.
    """
    transport = transport or get_transport()
    summary = DispatchSummary()

    for result in list(pending_results()):
        try:
            send_result_notification(result, transport=transport)
        except (TransportError, DatabaseError) as exc:
            summary.failed += 1
            summary.failed_ids.append(result.id)
            if isinstance(exc, DatabaseError):
                logger.exception("Could not record notification for result %s", result.id)
            continue
        summary.succeeded += 1

    logger.info("Bulk SMS dispatch complete: %s", summary.detail)
    return summary
