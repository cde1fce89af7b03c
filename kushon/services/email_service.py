"""SMTP delivery of new-volume notification emails.

Bodies are Jinja2 string templates rendered into a multipart
plain-text/HTML message. Every send opens its own connection using the
configured SMTP timeout.
"""
import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import Optional

from jinja2 import Environment, BaseLoader

from kushon import config
from kushon.config import SMTPSettings
from kushon.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)

SENDER_NAME = "Kushon"
DEFAULT_SENDER = "noreply@localhost"

_HTML_ENV = Environment(loader=BaseLoader(), autoescape=True, trim_blocks=True, lstrip_blocks=True)
_TEXT_ENV = Environment(loader=BaseLoader(), autoescape=False, trim_blocks=True, lstrip_blocks=True)

SUBJECT_TEMPLATE = _TEXT_ENV.from_string("New volume available: {{ title_name }}")

HTML_TEMPLATE = _HTML_ENV.from_string("""\
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #3498db;">New Volume Available!</h2>
  <p>Hi {{ user_name }},</p>
  <p>Great news! A new volume of <strong>{{ title_name }}</strong> has been added.</p>
  <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <h3 style="color: #2c3e50; margin-top: 0;">Volume {{ volume_number }}</h3>
    <p style="margin-bottom: 0;"><strong>Title:</strong> {{ title_name }}</p>
  </div>
  <p>Open your Kushon account to update your progress and mark this volume as owned!</p>
{% if frontend_url %}
  <div style="text-align: center; margin: 30px 0;">
    <a href="{{ frontend_url }}" style="background-color: #3498db; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; display: inline-block;">Open Kushon</a>
  </div>
{% endif %}
  <hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;">
  <p style="color: #7f8c8d; font-size: 12px;">
    You are receiving this email because you turned on notifications for "{{ title_name }}".
    To stop them, change the title's notification settings in your account.
  </p>
</div>
""")

TEXT_TEMPLATE = _TEXT_ENV.from_string("""\
New Volume Available!

Hi {{ user_name }},

Great news! A new volume of "{{ title_name }}" has been added.

Volume {{ volume_number }}
Title: {{ title_name }}

Open your Kushon account to update your progress and mark this volume as owned!
{% if frontend_url %}

Link: {{ frontend_url }}
{% endif %}

---
You are receiving this email because you turned on notifications for "{{ title_name }}".
To stop them, change the title's notification settings in your account.
""")


class EmailService:
    def __init__(self, settings: Optional[SMTPSettings] = None, frontend_url: Optional[str] = None):
        self.settings = settings or config.smtp_settings()
        self.frontend_url = frontend_url if frontend_url is not None else config.frontend_url()

    def build_new_volume_message(
        self,
        user_email: str,
        user_name: str,
        title_name: str,
        volume_number: int
    ) -> EmailMessage:
        context = {
            "user_name": user_name,
            "title_name": title_name,
            "volume_number": volume_number,
            "frontend_url": self.frontend_url,
        }
        message = EmailMessage()
        message["Subject"] = SUBJECT_TEMPLATE.render(**context)
        message["From"] = formataddr((SENDER_NAME, self.settings.sender or self.settings.user or DEFAULT_SENDER))
        message["To"] = user_email
        message.set_content(TEXT_TEMPLATE.render(**context))
        message.add_alternative(HTML_TEMPLATE.render(**context), subtype="html")
        return message

    def send_new_volume_notification(
        self,
        user_email: str,
        user_name: str,
        title_name: str,
        volume_number: int
    ) -> None:
        """Send one new-volume email.

        Raises:
            EmailDeliveryError: If SMTP is not configured or the send fails
        """
        message = self.build_new_volume_message(user_email, user_name, title_name, volume_number)
        try:
            with self._connect() as smtp:
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending email to {user_email}: {str(e)}")
            raise EmailDeliveryError(f"Could not send email to {user_email}: {str(e)}") from e

        logger.info(f"Email sent to {user_email}")

    def test_connection(self) -> bool:
        """Open and verify an SMTP connection without sending anything."""
        try:
            with self._connect() as smtp:
                smtp.noop()
        except (EmailDeliveryError, smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP connection check failed: {str(e)}")
            return False
        logger.info("SMTP connection verified")
        return True

    def _connect(self) -> smtplib.SMTP:
        settings = self.settings
        if not settings.host:
            raise EmailDeliveryError("SMTP_HOST is not configured")

        if settings.secure:
            smtp = smtplib.SMTP_SSL(settings.host, settings.port, timeout=settings.timeout)
        else:
            smtp = smtplib.SMTP(settings.host, settings.port, timeout=settings.timeout)

        try:
            if not settings.secure:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
            if settings.has_auth:
                smtp.login(settings.user, settings.password)
        except (smtplib.SMTPException, OSError):
            smtp.close()
            raise
        return smtp
