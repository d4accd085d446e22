# storefront/services/notification_service.py
from kombu.exceptions import OperationalError

from storefront.celery_worker import celery_app
from storefront.utils.email_utils import send_email
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia wysylane poza requestem (Celery).
    """

    # zamowienie/token sa juz zapisane; brak brokera nie moze zamienic sukcesu w 500
    @staticmethod
    def send_order_notification(user_id: int, order_id: int):
        try:
            send_order_notification_task.delay(user_id, order_id)
        except (OperationalError, OSError) as e:
            logger.warning(f"Order {order_id} notification not queued, broker unavailable: {e}")

    @staticmethod
    def send_password_reset(email: str, reset_link: str):
        try:
            send_password_reset_email_task.delay(email, reset_link)
        except (OperationalError, OSError) as e:
            logger.warning(f"Password reset mail for {email} not queued, broker unavailable: {e}")


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """
    Zamowienie czeka na reczne potwierdzenie platnosci (UPI).
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} placed, awaiting payment verification")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}


@celery_app.task(
    name="storefront.services.notification_service.send_password_reset_email_task",
    autoretry_for=(OSError,),
    retry_backoff=True,
    max_retries=3,
)
def send_password_reset_email_task(email: str, reset_link: str):
    send_email(
        email,
        "Password Reset Request",
        "You requested to reset your password.\n\n"
        f"Open this link to choose a new one: {reset_link}\n\n"
        "If you did not request this, you can ignore this email.",
    )
    return {"email": email, "status": "sent"}
