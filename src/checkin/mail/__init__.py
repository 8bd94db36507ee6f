"""
Email module for sending run reports via Resend API.
"""
from .email_service import EmailService
from .config import get_email_config, is_email_configured

__all__ = [
    "EmailService",
    "get_email_config",
    "is_email_configured",
]
