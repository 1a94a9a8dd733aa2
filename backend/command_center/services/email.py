"""Email service for student profile notifications."""
import asyncio
import html
import logging
from typing import Iterable, List, Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Content, Email, Mail, To

from command_center.config import settings
from command_center.schemas.email import BulkEmailResult, EmailRecipient, RejectionRecipient

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = "Profile requires additional information"

_WRAPPER = """
<html>
    <body style="font-family: 'Segoe UI', Arial, sans-serif; background-color: #f8fafc; padding: 20px;">
        <div style="max-width: 600px; margin: 0 auto; background-color: white; padding: 40px; border-radius: 12px; box-shadow: 0 4px 6px rgba(0,0,0,0.1);">
            <div style="background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 20px; border-radius: 12px; text-align: center;">
                <h1 style="margin: 0; font-size: 24px;">Summer of Tech</h1>
            </div>
            {body}
            <p style="color: #64748b; font-size: 14px; margin-top: 30px; border-top: 1px solid #e2e8f0; padding-top: 20px;">
                Best regards,<br>The Summer of Tech Team
            </p>
            <p style="color: #94a3b8; font-size: 12px;">
                This email was sent to {email}. If you believe you received this email in error, please contact us at {contact}.
            </p>
        </div>
    </body>
</html>
"""


class EmailService:
    """Handles email sending in dev and production modes."""

    def __init__(self):
        self.mode = settings.email_mode
        self.from_address = settings.email_from_address
        self.from_name = settings.email_from_name
        if self.mode == "prod":
            self.sendgrid_client = SendGridAPIClient(settings.sendgrid_api_key)
        else:
            self.sendgrid_client = None

    def _wrap(self, body: str, to_email: str) -> str:
        return _WRAPPER.format(body=body, email=html.escape(to_email), contact=html.escape(self.from_address))

    async def send_profile_approval_notification(self, student_name: str, student_email: str) -> bool:
        """Tell a student their profile is live."""
        subject = "Your Profile is Now Live! - Summer of Tech"
        profile_link = f"{settings.app_url.rstrip('/')}/students/{student_email}"
        name = html.escape(student_name)

        html_content = self._wrap(
            f"""
            <h2 style="color: #1e293b;">Congratulations!</h2>
            <p>Dear <strong>{name}</strong>,</p>
            <p>We're thrilled to inform you that your student profile has been <strong>approved and is now live</strong> on the Summer of Tech platform!</p>
            <ul>
                <li>Your profile is visible to participating employers</li>
                <li>You're eligible for job matching and opportunities</li>
                <li>Employers can view your skills, experience, and documents</li>
                <li>You'll receive notifications about relevant job opportunities</li>
            </ul>
            <p style="margin: 30px 0; text-align: center;">
                <a href="{html.escape(profile_link)}" style="background: #667eea; color: white; padding: 15px 30px; text-decoration: none; border-radius: 8px; font-weight: bold;">
                    View Your Live Profile
                </a>
            </p>
            """,
            student_email,
        )

        text_content = f"""
        Congratulations {student_name}!

        Your student profile has been approved and is now live on the Summer of Tech platform!

        What this means for you:
        - Your profile is visible to participating employers
        - You're eligible for job matching and opportunities
        - Employers can view your skills, experience, and documents
        - You'll receive notifications about relevant job opportunities

        View your live profile: {profile_link}

        Need help? Email {self.from_address}

        Best regards,
        The Summer of Tech Team
        """

        return await self._send_email(student_email, subject, text_content, html_content)

    async def send_profile_rejection_notification(
        self,
        student_name: str,
        student_email: str,
        rejection_reasons: Optional[List[str]] = None,
    ) -> bool:
        """Tell a student what to fix before their profile can be approved."""
        reasons = [r for r in (rejection_reasons or []) if r] or [DEFAULT_REJECTION_REASON]
        subject = "Profile Review Update - Summer of Tech"
        name = html.escape(student_name)
        reason_items = "\n".join(f"<li>{html.escape(r)}</li>" for r in reasons)

        html_content = self._wrap(
            f"""
            <h2 style="color: #1e293b;">Profile Review Update</h2>
            <p>Dear <strong>{name}</strong>,</p>
            <p>Thank you for submitting your profile to Summer of Tech. After careful review, your profile requires some updates before it can be approved.</p>
            <div style="background: #fef2f2; border: 1px solid #f87171; padding: 20px; border-radius: 8px;">
                <h3 style="margin-top: 0;">Areas that need attention:</h3>
                <ul>
                {reason_items}
                </ul>
            </div>
            <p><strong>Don't worry, you can resubmit!</strong> Address the feedback above and we'll review your profile again promptly.</p>
            """,
            student_email,
        )

        reason_lines = "\n".join(f"        • {r}" for r in reasons)
        text_content = f"""
        Profile Review Update - Summer of Tech

        Dear {student_name},

        Thank you for submitting your profile to Summer of Tech. After careful review,
        your profile requires some updates before it can be approved.

        Areas that need attention:
{reason_lines}

        Don't worry - you can resubmit! Address the feedback above and we'll review it again promptly.

        Need help? Email {self.from_address}

        Best regards,
        The Summer of Tech Team
        """

        return await self._send_email(student_email, subject, text_content, html_content)

    async def send_bulk_profile_approval_notifications(self, students: Iterable[EmailRecipient]) -> BulkEmailResult:
        """One approval email per student, sent in order. Never raises."""
        result = BulkEmailResult()

        for student in students:
            try:
                if await self.send_profile_approval_notification(student.name, student.email):
                    result.success_count += 1
                else:
                    result.failed_count += 1
                    result.errors.append(f"Failed to send email to {student.name} ({student.email})")
            except Exception as e:
                result.failed_count += 1
                message = f"Error sending email to {student.name} ({student.email}): {str(e)}"
                result.errors.append(message)
                logger.error(message)

        logger.info(f"Bulk approval emails: {result.success_count} sent, {result.failed_count} failed")
        return result

    async def send_bulk_profile_rejection_notifications(self, students: Iterable[RejectionRecipient]) -> BulkEmailResult:
        """One rejection email per student, sent in order. Never raises."""
        result = BulkEmailResult()

        for student in students:
            try:
                if await self.send_profile_rejection_notification(student.name, student.email, student.reasons):
                    result.success_count += 1
                else:
                    result.failed_count += 1
                    result.errors.append(f"Failed to send rejection email to {student.name} ({student.email})")
            except Exception as e:
                result.failed_count += 1
                message = f"Error sending rejection email to {student.name} ({student.email}): {str(e)}"
                result.errors.append(message)
                logger.error(message)

        logger.info(f"Bulk rejection emails: {result.success_count} sent, {result.failed_count} failed")
        return result

    async def test_email_configuration(self) -> bool:
        """Check that outbound email can be sent with the current settings."""
        if self.mode == "dev":
            logger.info("[DEV MODE] Email configuration is valid (messages are logged, not sent)")
            return True

        if not settings.sendgrid_api_key or not self.from_address:
            logger.error("Email configuration error: SENDGRID_API_KEY and EMAIL_FROM_ADDRESS are required")
            return False

        try:
            response = await asyncio.to_thread(self.sendgrid_client.client.scopes.get)
        except Exception as e:
            logger.error(f"Email configuration error: {str(e)}")
            return False

        if 200 <= response.status_code < 300:
            logger.info("Email configuration is valid")
            return True
        logger.error(f"Email configuration error: SendGrid returned {response.status_code}")
        return False

    async def _send_email(self, to_email: str, subject: str, text_content: str, html_content: str) -> bool:
        """Internal method to send email via SendGrid or dev console."""
        if self.mode == "dev":
            logger.info(f"[DEV MODE] Email to {to_email}: {subject}")
            logger.info(f"[DEV MODE] Content:\n{text_content}")
            return True

        try:
            mail = Mail(
                from_email=Email(self.from_address, self.from_name),
                to_emails=To(to_email),
                subject=subject,
                plain_text_content=Content("text/plain", text_content),
                html_content=Content("text/html", html_content)
            )

            response = await asyncio.to_thread(self.sendgrid_client.send, mail)

            if 200 <= response.status_code < 300:
                logger.info(f"Email sent to {to_email}: {subject}")
                return True
            else:
                logger.error(f"Failed to send email to {to_email}: {response.status_code}")
                return False
        except Exception as e:
            logger.error(f"Error sending email to {to_email}: {str(e)}")
            return False


# Global email service instance
email_service = EmailService()
