import smtplib
import logging
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.core.config import Settings

logger = logging.getLogger(__name__)


class EmailNotConfigured(RuntimeError):
    pass


class OutgoingEmail(BaseModel):
    to: str
    subject: str
    html: str


def _as_html(text: str) -> str:
    return escape(text).replace("\n", "<br>")


def build_owner_notification(contact: dict, recipient: str, sent_at: datetime) -> OutgoingEmail:
    """Notification for the site owner with everything the visitor submitted."""
    body = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h2 style="color: #3b82f6;">New Contact Form Submission</h2>
            <div style="background: #f9fafb; padding: 20px; border-radius: 8px; margin: 20px 0;">
                <p><strong>Name:</strong> {escape(contact['name'])}</p>
                <p><strong>Email:</strong> {escape(contact['email'])}</p>
                <p><strong>Subject:</strong> {escape(contact['subject'])}</p>
                <p><strong>Message:</strong></p>
                <div style="background: white; padding: 15px; border-radius: 4px; border-left: 4px solid #3b82f6;">
                    {_as_html(contact['message'])}
                </div>
            </div>
            <p style="color: #6b7280; font-size: 14px;">
                Sent from your portfolio website at {sent_at.strftime('%Y-%m-%d %H:%M:%S %Z').strip()}
            </p>
        </div>
    """
    return OutgoingEmail(
        to=recipient,
        subject=f"Portfolio Contact: {contact['subject']}",
        html=body,
    )


def build_auto_reply(contact: dict, owner_name: str) -> OutgoingEmail:
    """Acknowledgement sent back to the visitor, echoing their message."""
    body = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h2 style="color: #3b82f6;">Thank You for Your Message!</h2>
            <p>Hi {escape(contact['name'])},</p>
            <p>Thank you for reaching out through my portfolio website. I've received your message and will get back to you as soon as possible.</p>

            <div style="background: #f9fafb; padding: 20px; border-radius: 8px; margin: 20px 0;">
                <h3 style="margin-top: 0;">Your Message:</h3>
                <p><strong>Subject:</strong> {escape(contact['subject'])}</p>
                <div style="background: white; padding: 15px; border-radius: 4px;">
                    {_as_html(contact['message'])}
                </div>
            </div>

            <p>Best regards,<br>{escape(owner_name)}</p>
            <p style="color: #6b7280; font-size: 14px;">
                This is an automated response. Please do not reply to this email.
            </p>
        </div>
    """
    return OutgoingEmail(
        to=contact["email"],
        subject="Thank you for contacting me!",
        html=body,
    )


class EmailService:
    """SMTP mail channel. Each send opens its own connection."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def configured(self) -> bool:
        return self.settings.email_configured

    def _build_mime(self, email: OutgoingEmail) -> MIMEMultipart:
        msg = MIMEMultipart()
        msg['From'] = self.settings.EMAIL_USER
        msg['To'] = email.to
        msg['Subject'] = email.subject
        msg.attach(MIMEText(email.html, 'html', 'utf-8'))
        return msg

    def send_sync(self, email: OutgoingEmail):
        if not self.configured:
            raise EmailNotConfigured("EMAIL_USER and EMAIL_PASS must be set to send email")

        msg = self._build_mime(email)

        logger.info(f"Attempting to send email via {self.settings.EMAIL_HOST}:{self.settings.EMAIL_PORT}")
        with smtplib.SMTP(
            self.settings.EMAIL_HOST,
            self.settings.EMAIL_PORT,
            timeout=self.settings.EMAIL_TIMEOUT,
        ) as server:
            if self.settings.EMAIL_USE_TLS:
                server.starttls()
            server.login(self.settings.EMAIL_USER, self.settings.EMAIL_PASS)
            server.send_message(msg)

        logger.info(f"📧 Email sent to {email.to}")

    async def send(self, email: OutgoingEmail):
        # smtplib blocks, keep it off the event loop
        await run_in_threadpool(self.send_sync, email)
