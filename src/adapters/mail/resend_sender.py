"""
Resend email sender adapter - Implements EmailSender protocol.

Sends transactional mail through the Resend API (POST /emails).
No tracking or tags are requested, so links are delivered unrewritten.
Any non-accepted send surfaces as EmailDeliveryError.
"""

import logging
from typing import Any

import resend

from src.domain.exceptions import EmailDeliveryError
from src.domain.ports import EmailMessage

logger = logging.getLogger(__name__)


class ResendEmailSender:
    """
    Implements EmailSender protocol via the Resend SDK.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        api_key: str | None,
        from_address: str | None,
        reply_to: str = "support@schoolchow.com",
    ) -> None:
        self.api_key = api_key
        self.from_address = from_address
        self.reply_to = reply_to

        if self.api_key:
            resend.api_key = self.api_key
            logger.info("Resend email sender initialized")
        else:
            logger.warning("Resend email sender not configured - RESEND_API_KEY not set")

    def is_configured(self) -> bool:
        return bool(self.api_key and self.from_address)

    def send(self, message: EmailMessage) -> str:
        """
        Send a message via Resend.

        Returns:
            Resend message id

        Raises:
            EmailDeliveryError: Sender not configured, or Resend rejected the send
        """
        if not self.api_key:
            raise EmailDeliveryError("RESEND_API_KEY not set")
        if not self.from_address:
            raise EmailDeliveryError("EMAIL_FROM not set")

        params: dict[str, Any] = {
            "from": self.from_address,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
            "reply_to": [self.reply_to],
            "headers": {
                "Auto-Submitted": "auto-generated",
                "X-Auto-Response-Suppress": "All",
            },
        }

        logger.info("Sending email to %s via Resend", message.to)
        try:
            response = resend.Emails.send(params)
        except resend.exceptions.ResendError as exc:
            logger.error("Resend API error: %s", exc)
            raise EmailDeliveryError(f"Resend error: {exc}") from exc
        except Exception as exc:
            logger.error("Unexpected error sending email: %s", exc, exc_info=True)
            raise EmailDeliveryError(f"Unexpected error sending email: {exc}") from exc

        message_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        if not message_id:
            raise EmailDeliveryError("Resend response carried no message id")

        logger.info("Email sent successfully: %s", message_id)
        return message_id
