# storefront/utils/email_utils.py
import smtplib
from email.message import EmailMessage

from storefront.utils import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def send_email(to_email: str, subject: str, body: str) -> None:
    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.SMTP_USER
    msg["To"] = to_email
    msg.set_content(body)

    with smtplib.SMTP_SSL(settings.SMTP_HOST, settings.SMTP_PORT) as smtp:
        smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        smtp.send_message(msg)
    logger.info(f"Email '{subject}' sent to {to_email}")
