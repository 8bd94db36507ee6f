"""
Email service for sending check-in run reports using Resend API.
"""
import html
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import resend

from checkin.mail.config import get_email_config, is_email_configured

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending emails using Resend API."""

    def __init__(self, email_config: Optional[Dict[str, Any]] = None):
        """
        Initialize the email service with configuration.

        Args:
            email_config: Result of get_email_config(). Read from the
                environment when omitted.
        """
        if email_config is None:
            email_config = get_email_config()
        self._configured = is_email_configured(email_config)
        self.api_key = email_config.get("api_key")
        self.from_email = email_config.get("from_email")
        self.from_name = email_config.get("from_name") or "Check In Script"
        self.recipients: List[str] = list(email_config.get("recipients") or [])

    def is_configured(self) -> bool:
        return self._configured

    def send(self, subject: str, body: str, attachments: Sequence[Tuple[str, bytes]]) -> bool:
        """
        Send a report email with file attachments.

        Args:
            subject: Subject line
            body: Plain-text body, also rendered as simple HTML
            attachments: (filename, content) pairs

        Returns:
            True if email sent successfully, False otherwise
        """
        if not self._configured:
            logger.debug("Email not configured, skipping send")
            return False

        try:
            # Resend reads the key from module level
            resend.api_key = self.api_key

            params: resend.Emails.SendParams = {
                "from": f"{self.from_name} <{self.from_email}>",
                "to": self.recipients,
                "subject": subject,
                "text": body,
                "html": self.format_html_body(subject, body),
                "attachments": [
                    {"filename": name, "content": list(content)}
                    for name, content in attachments
                ],
            }
            email = resend.Emails.send(params)

            # Resend returns a TypedDict, so access id as a dictionary key
            email_id = email.get("id", "unknown")
            logger.info(
                f"Email sent successfully to {', '.join(self.recipients)}. "
                f"Email ID: {email_id} ({len(attachments)} attachment(s))"
            )
            return True
        except Exception as e:
            logger.error(f"Error sending email to {', '.join(self.recipients)}: {e}")
            return False

    def format_html_body(self, subject: str, body: str) -> str:
        """
        Render the plain-text report as HTML.

        Args:
            subject: Subject line, used as heading
            body: Plain-text body

        Returns:
            HTML string
        """
        color = "#28a745" if "Completed" in subject else "#dc3545"
        paragraphs = "".join(
            f"<p>{html.escape(line)}</p>" for line in body.splitlines() if line.strip()
        )
        return f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <h2 style="color: {color};">{html.escape(subject)}</h2>
            <div style="background-color: #f8f9fa; padding: 15px; border-radius: 5px; margin: 20px 0;">
                {paragraphs}
            </div>
            <p style="margin-top: 30px; color: #666; font-size: 0.9em;">
                This is an automated message from the check-in script.
            </p>
        </body>
        </html>
        """
