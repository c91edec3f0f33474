# File: app/services/email_service.py
import html
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Dict, List, Optional

from app.core.config import settings

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class EmailTemplateNotFound(Exception):
    pass


def render_template(name: str, variables: Dict[str, str], base_url: Optional[str] = None) -> str:
    """
    Load ``templates/<name>.html`` and substitute ``{{KEY}}`` placeholders.

    Values are HTML-escaped; ``{{BASE_URL}}`` is filled from settings.
    """
    template_file = TEMPLATE_DIR / f"{name}.html"
    if not template_file.exists():
        raise EmailTemplateNotFound(f"Email template not found: {template_file}")

    content = template_file.read_text(encoding="utf-8")
    content = content.replace("{{BASE_URL}}", base_url or settings.base_url)
    for key, value in variables.items():
        content = content.replace("{{" + key.upper() + "}}", html.escape(str(value)))
    return content


class EmailService:
    def __init__(self):
        self.smtp_server = settings.SMTP_SERVER
        self.smtp_port = settings.SMTP_PORT
        self.use_ssl = settings.SMTP_USE_SSL
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.from_email = settings.FROM_EMAIL
        self.from_name = settings.FROM_NAME
        self.timeout = settings.EMAIL_TIMEOUT

    def send_email(
        self,
        to_emails: List[str],
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """Send a multipart email over SMTP; returns False on failure"""

        if not settings.SEND_EMAILS:
            logger.info(f"Email sending disabled. Would send: {subject} to {to_emails}")
            return True

        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = f"{self.from_name} <{self.from_email}>"
            message["To"] = ", ".join(to_emails)

            if text_content:
                message.attach(MIMEText(text_content, "plain"))
            message.attach(MIMEText(html_content, "html"))

            context = ssl.create_default_context()

            if self.use_ssl:
                with smtplib.SMTP_SSL(self.smtp_server, self.smtp_port, context=context, timeout=self.timeout) as server:
                    server.login(self.username, self.password)
                    server.sendmail(self.from_email, to_emails, message.as_string())
            else:
                with smtplib.SMTP(self.smtp_server, self.smtp_port, timeout=self.timeout) as server:
                    server.starttls(context=context)
                    server.login(self.username, self.password)
                    server.sendmail(self.from_email, to_emails, message.as_string())

            logger.info(f"Email sent successfully to {to_emails}")
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email: {str(e)}")
            return False

    def send_registration_confirmation(self, to_email: str, first_name: str, last_name: str) -> bool:
        """Send the 'you are registered' email to a new registrant"""
        full_name = f"{first_name} {last_name}"
        variables = {
            "first_name": first_name,
            "last_name": last_name,
            "full_name": full_name,
            "event_name": settings.EVENT_NAME,
        }

        try:
            html_content = render_template("registration_email", variables)
        except EmailTemplateNotFound as e:
            logger.error(str(e))
            return False

        text_content = (
            f"Dear {first_name},\n\n"
            f"Thank you for registering for {settings.EVENT_NAME}. "
            "We have received your details and your spot is confirmed. "
            "Further event information and updates will be shared with you shortly.\n\n"
            f"With appreciation\n{self.from_name}"
        )

        return self.send_email(
            to_emails=[to_email],
            subject=f"{settings.EVENT_NAME} - Registration Confirmation",
            html_content=html_content,
            text_content=text_content,
        )


email_service = EmailService()
