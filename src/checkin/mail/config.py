"""
Email configuration for the Resend API.
"""
import os
import re
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("api_key", "from_email", "recipients")


def get_email_config() -> Dict[str, Any]:
    """
    Get email configuration from environment variables.

    Missing values are returned as None/empty rather than raising: the
    report is optional and a run must not fail because mail is not set up.

    Returns:
        Dictionary with email configuration
    """
    recipients_raw = os.getenv("CHECKIN_EMAIL_RECIPIENTS", "")
    recipients = [r for r in re.split(r"[,\s]+", recipients_raw) if r]

    return {
        "api_key": os.getenv("RESEND_API_KEY"),
        "from_email": os.getenv("RESEND_FROM_EMAIL"),
        "from_name": os.getenv("RESEND_FROM_NAME", "Check In Script"),
        "recipients": recipients,
    }


def is_email_configured(email_config: Dict[str, Any]) -> bool:
    """True if every credential needed to send a report is present."""
    missing = [key for key in REQUIRED_KEYS if not email_config.get(key)]
    if missing:
        logger.debug(f"Email not configured, missing: {', '.join(missing)}")
        return False
    return True
