import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

from starlette.concurrency import run_in_threadpool

from modules.shared.config import Settings, get_settings

# Configure logger
logger = logging.getLogger("email_service")


class EmailService:
    def __init__(
        self,
        smtp_host: Optional[str],
        smtp_port: int = 587,
        smtp_user: Optional[str] = None,
        smtp_pass: Optional[str] = None,
        from_email: Optional[str] = None,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_pass = smtp_pass
        self.from_email = from_email or smtp_user

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailService":
        return cls(
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            smtp_user=settings.smtp_user,
            smtp_pass=settings.smtp_pass,
            from_email=settings.smtp_from,
        )

    @property
    def is_configured(self) -> bool:
        return all([self.smtp_host, self.smtp_user, self.smtp_pass, self.from_email])

    def _deliver(self, to_email: str, subject: str, html: str) -> None:
        msg = MIMEMultipart()
        msg['From'] = self.from_email
        msg['To'] = to_email
        msg['Subject'] = subject
        msg.attach(MIMEText(html, 'html'))

        # Port 465 is implicit TLS, everything else upgrades with STARTTLS
        if self.smtp_port == 465:
            server = smtplib.SMTP_SSL(self.smtp_host, self.smtp_port)
        else:
            server = smtplib.SMTP(self.smtp_host, self.smtp_port)
            server.starttls()
        try:
            server.login(self.smtp_user, self.smtp_pass)
            server.sendmail(self.from_email, to_email, msg.as_string())
        finally:
            server.quit()

    def send_email(self, to_email: str, subject: str, html: str) -> bool:
        """Send an HTML email, or log it when SMTP is not configured"""
        if not self.is_configured:
            logger.info(f"[DEV MODE] Email would be sent to {to_email} | Subject: {subject}\n{html}")
            return True
        try:
            self._deliver(to_email, subject, html)
            logger.info(f"Email '{subject}' sent successfully to {to_email}")
            return True
        except Exception as e:
            logger.error(f"Failed to send email '{subject}' to {to_email}: {e}")
            return False

    async def send(self, to_email: str, subject: str, html: str) -> bool:
        """Async wrapper, SMTP I/O runs off the event loop"""
        return await run_in_threadpool(self.send_email, to_email, subject, html)

    async def send_password_reset_email(self, to_email: str, full_name: str, reset_url: str) -> bool:
        html = f"""
        <p>Hello {full_name},</p>
        <p>Click the link below to reset your password:</p>
        <p><a href="{reset_url}">Reset Password</a></p>
        <p>This link will expire in 1 hour for security reasons.</p>
        <p>If you did not request this, please ignore this email.</p>
        """
        return await self.send(to_email, "Password Reset Request", html)

    async def send_password_changed_email(self, to_email: str, full_name: str) -> bool:
        html = f"""
        <p>Hello {full_name},</p>
        <p>Your password has been successfully reset. You can now log in with your new password.</p>
        <p>If you did not make this change, please contact support immediately.</p>
        """
        return await self.send(to_email, "Password Reset Successful", html)


def get_email_service() -> EmailService:
    return EmailService.from_settings(get_settings())
