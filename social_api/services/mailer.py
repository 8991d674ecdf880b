"""Mail transports. All of them are blocking; the dispatcher runs them off the event loop."""
import logging
import smtplib
from email.mime.text import MIMEText
from typing import Protocol

from celery import Celery

from social_api.core.celery_app import SEND_EMAIL_TASK, build_celery_app
from social_api.core.config import Settings
from social_api.services.email_templates import EmailMessage

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send(self, message: EmailMessage) -> None: ...


class SmtpMailer:
    def __init__(self, host: str, port: int, username: str | None, password: str | None, use_tls: bool = True):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailer":
        return cls(settings.SMTP_HOST, settings.SMTP_PORT, settings.EMAIL_USER, settings.EMAIL_PASS, settings.SMTP_USE_TLS)

    def send(self, message: EmailMessage) -> None:
        mime = MIMEText(message.html, "html", "utf-8")
        mime["Subject"] = message.subject
        mime["From"] = self.username or ""
        mime["To"] = message.to
        with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.username and self.password:
                smtp.login(self.username, self.password)
            smtp.send_message(mime)
        logger.info("Email sent to %s: %s", message.to, message.subject)


class CeleryMailer:
    """Hands the message to the Celery worker (see social_api.workers.email)."""

    def __init__(self, app: Celery):
        self.app = app

    def send(self, message: EmailMessage) -> None:
        self.app.send_task(SEND_EMAIL_TASK, args=[message.to, message.subject, message.html])


class ConsoleMailer:
    """Development transport: logs instead of sending."""

    def send(self, message: EmailMessage) -> None:
        logger.info("Email to %s: %s", message.to, message.subject)


def build_mailer(settings: Settings) -> Mailer:
    backend = settings.EMAIL_BACKEND.lower()
    if backend == "celery":
        return CeleryMailer(build_celery_app(settings))
    if backend == "smtp":
        return SmtpMailer.from_settings(settings)
    if backend == "console":
        return ConsoleMailer()
    raise ValueError(f"Unknown EMAIL_BACKEND: {settings.EMAIL_BACKEND}")
