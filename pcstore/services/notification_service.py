# pcstore/services/notification_service.py
from decimal import Decimal

from pcstore.celery_worker import celery_app
from pcstore.services.mail_client import MailClient
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień mailowych.
    Używa Celery, żeby request nie czekał na API mailowe.
    """

    @staticmethod
    def send_password_reset(email: str, code: str):
        body = (
            f"Your password reset code is {code}.\n"
            "It expires in one hour. If you did not ask for a reset, ignore this message."
        )
        send_email_task.delay(email, "Password reset code", body)

    @staticmethod
    def send_payment_confirmation(email: str, order_id: int, amount: Decimal):
        body = f"We received your payment of {amount} for order #{order_id}. Thank you!"
        send_email_task.delay(email, f"Payment for order #{order_id}", body)


@celery_app.task(name="pcstore.services.notification_service.send_email_task")
def send_email_task(to: str, subject: str, body: str):
    """
    Celery task - wysyła maila przez MailClient.
    """
    sent = MailClient().send(to, subject, body)
    logger.info(f"[NOTIFICATION] {subject!r} -> {to} (sent={sent})")
    return {"to": to, "subject": subject, "status": "sent" if sent else "skipped"}
