"""Outgoing email over SMTP."""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from gymsmash.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class EmailService:
    """Service for sending emails."""

    def __init__(self):
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.smtp_user
        self.smtp_password = settings.smtp_password
        self.from_email = settings.smtp_from_email
        self.from_name = settings.smtp_from_name
        self.enabled = settings.email_enabled

    def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> bool:
        """
        Send an email.

        Returns True if sent successfully, False otherwise.
        """
        if not self.enabled:
            logger.info(f"Email disabled, would send to {to_email}: {subject}")
            return False

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = to_email

        if text_content:
            msg.attach(MIMEText(text_content, "plain"))
        msg.attach(MIMEText(html_content, "html"))

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                if self.smtp_user and self.smtp_password:
                    server.starttls()
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending email to {to_email}: {e}")
            return False

        logger.info(f"Sent email to {to_email}: {subject}")
        return True

    async def send_email_async(self, *args, **kwargs) -> bool:
        """Send without blocking the event loop."""
        return await run_in_threadpool(self.send_email, *args, **kwargs)

    async def send_magic_link(self, to_email: str, link: str) -> bool:
        subject = "Your Gym Smash sign-in link"
        html = (
            "<h2>Sign in to Gym Smash</h2>"
            f"<p><a href=\"{link}\">Click here to sign in</a>. "
            f"The link expires in {settings.magic_link_expire_minutes} minutes.</p>"
        )
        text = f"Sign in to Gym Smash: {link}"
        return await self.send_email_async(to_email, subject, html, text)

    async def send_buddy_invite(self, to_email: str, inviter_name: str, accept_link: str) -> bool:
        subject = f"{inviter_name} wants you as their Gym Smash workout buddy"
        html = (
            f"<h2>{inviter_name} invited you to be workout buddies!</h2>"
            "<p>Train together, send each other stickers and keep each other going.</p>"
            f"<p><a href=\"{accept_link}\">Accept the invite</a> and get "
            f"{settings.buddy_trial_days} days of Premium free.</p>"
        )
        text = f"{inviter_name} invited you to Gym Smash. Accept: {accept_link}"
        return await self.send_email_async(to_email, subject, html, text)

    async def send_student_code(self, to_email: str, code: str, subject: str) -> bool:
        html = (
            "<h2>Verify your student status</h2>"
            f"<p>Your verification code is <strong>{code}</strong>.</p>"
            f"<p>This code expires in {settings.student_code_expire_minutes} minutes.</p>"
        )
        text = f"Your Gym Smash student verification code is {code}"
        return await self.send_email_async(to_email, subject, html, text)


# Singleton instance
email_service = EmailService()
