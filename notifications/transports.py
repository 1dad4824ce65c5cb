"""
Transports SMS. Interface unique: send(phone_number, message) -> référence.
Un échec lève TransportError. Le transport actif = settings.SMS_TRANSPORT.
"""
import logging
import uuid

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class TransportError(Exception):
    pass


class BaseTransport:
    def send(self, phone_number: str, message: str) -> str:
        raise NotImplementedError


class ConsoleTransport(BaseTransport):
    """Stub: journalise le message, aucun envoi réel."""

    def send(self, phone_number, message):
        ref = f"console-{uuid.uuid4().hex[:12]}"
        logger.info("SMS to %s [%s]: %s", phone_number, ref, message)
        return ref


class LocmemTransport(BaseTransport):
    """
    Garde les messages en mémoire (self.outbox), utile en tests.
    fail_for: numéros pour lesquels l'envoi échoue.
    """

    def __init__(self, fail_for=None):
        self.outbox = []
        self.fail_for = set(fail_for or ())

    def send(self, phone_number, message):
        if phone_number in self.fail_for:
            raise TransportError(f"Delivery to {phone_number} failed")
        self.outbox.append((phone_number, message))
        return f"locmem-{len(self.outbox)}"


def get_transport(path=None) -> BaseTransport:
    return import_string(path or settings.SMS_TRANSPORT)()
