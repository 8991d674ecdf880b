"""Celery task that delivers notification emails over SMTP."""
from social_api.core.celery_app import SEND_EMAIL_TASK, celery_app
from social_api.core.config import settings
from social_api.services.email_templates import EmailMessage
from social_api.services.mailer import SmtpMailer


@celery_app.task(name=SEND_EMAIL_TASK, ignore_result=True)
def send_email(to: str, subject: str, html: str) -> None:
    SmtpMailer.from_settings(settings).send(EmailMessage(to=to, subject=subject, html=html))
