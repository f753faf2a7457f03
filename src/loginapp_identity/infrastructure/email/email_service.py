import html
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from loginapp_config.settings import Settings
from loginapp_identity.application.ports import Notifier

logger = logging.getLogger(__name__)

PASSWORD_RESET_SUBJECT = "Password Reset Request"

PASSWORD_RESET_TEXT = """Hello {user_name},

We received a request to reset your password.

To reset your password, click the link below:
{reset_link}

This link will expire in {expires_minutes} minutes.

If you didn't request a password reset, please ignore this email.

---
This is an automated email, please do not reply.
-- {app_name}
"""

PASSWORD_RESET_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; background-color: #f5f5f5; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; border-radius: 8px; padding: 40px; box-shadow: 0 2px 4px rgba(0,0,0,0.1);">
        <h2 style="color: #1a202c; margin-top: 0;">Password Reset Request</h2>
        <p style="color: #333333; line-height: 1.6;">Hello {user_name},</p>
        <p style="color: #333333; line-height: 1.6;">We received a request to reset your password. Click the button below to create a new password:</p>
        <p style="margin: 30px 0; text-align: center;">
            <a href="{reset_link}" style="display: inline-block; padding: 14px 32px; background-color: #667eea; color: #ffffff !important; text-decoration: none; border-radius: 6px; font-weight: 600;">Reset Password</a>
        </p>
        <p style="color: #718096; font-size: 14px;">Or copy and paste this link into your browser:</p>
        <p style="word-break: break-all; color: #4a5568; font-size: 13px;">{reset_link}</p>
        <p style="background-color: #fff3cd; border-left: 4px solid #ffc107; padding: 12px; font-size: 14px;">
            This link will expire in {expires_minutes} minutes. If you didn't request a password reset, please ignore this email.
        </p>
        <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e2e8f0;">
            <p style="color: #718096; font-size: 13px; margin: 0;">This is an automated email, please do not reply.</p>
            <p style="color: #718096; font-size: 13px; margin-top: 8px;">{app_name}</p>
        </div>
    </div>
</body>
</html>
"""


class SMTPEmailNotifier(Notifier):
    """Sends password reset links over SMTP (implicit TLS, STARTTLS or plain)."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _create_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(text_body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send_email(self, to_email: str, message: MIMEMultipart) -> None:
        if not self._settings.smtp_host:
            msg = "SMTP host not configured"
            raise RuntimeError(msg)

        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )

        try:
            if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
                # Implicit TLS (port 465)
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                    context=context,
                ) as server:
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)
            else:
                # STARTTLS (port 587) or plain
                with smtplib.SMTP(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                ) as server:
                    if self._settings.smtp_starttls:
                        context = ssl.create_default_context()
                        server.starttls(context=context)
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)

            logger.info("Email sent to %s", to_email)

        except Exception as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise

    def send_password_reset(self, email: str, reset_link: str, user_name: str) -> None:
        if not self._settings.smtp_enabled:
            logger.warning("SMTP disabled, skipping password reset email to %s", email)
            return

        values = {
            "expires_minutes": self._settings.reset_token_expire_minutes,
            "app_name": self._settings.app_name,
        }
        text_body = PASSWORD_RESET_TEXT.format(
            user_name=user_name or "User",
            reset_link=reset_link,
            **values,
        )
        html_body = PASSWORD_RESET_HTML.format(
            user_name=html.escape(user_name or "User"),
            reset_link=html.escape(reset_link, quote=True),
            **{k: html.escape(str(v)) for k, v in values.items()},
        )

        message = self._create_message(
            to_email=email,
            subject=PASSWORD_RESET_SUBJECT,
            text_body=text_body,
            html_body=html_body,
        )

        self._send_email(email, message)
