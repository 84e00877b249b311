# backend/app/services/email.py
"""
Email Service for the Enescena platform

Sends transactional e-mail through the Resend API. When no API key is
configured (local development) messages are logged instead of sent.
"""

import logging
import re
from typing import Any, Dict, Optional

import resend

from ..core.config import settings
from ..core.exceptions import ServiceException

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


class EmailService:
    """Service for sending emails using Resend API."""

    def __init__(self, api_key: Optional[str] = None, from_email: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.resend_api_key
        self.from_email = from_email or settings.from_email
        if self.api_key:
            resend.api_key = self.api_key
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @staticmethod
    def html_to_text(html_content: str) -> str:
        """Convert HTML content to plain text for better deliverability"""
        text = _TAG_RE.sub("", html_content)
        text = _WS_RE.sub(" ", text)
        return text.strip()

    def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send an email using Resend.

        Returns:
            Dict containing the Resend API response (``{"dev": True}`` when logged only)

        Raises:
            ServiceException: If email sending fails
        """
        if not text_content:
            text_content = self.html_to_text(html_content)

        if not self.enabled:
            self.logger.info(f"[DEV EMAIL] to={to_email} subject={subject!r}")
            self.logger.debug(text_content)
            return {"dev": True}

        email_data = {
            "from": self.from_email,
            "to": to_email,
            "subject": subject,
            "html": html_content,
            "text": text_content,
        }

        try:
            response = resend.Emails.send(email_data)
        except Exception as e:
            self.logger.error(f"Failed to send email to {to_email}: {type(e).__name__}: {e}")
            raise ServiceException(f"Email sending failed: {e}") from e

        self.logger.info(f"Email sent successfully to {to_email} - Subject: {subject}")
        return dict(response) if response else {}
