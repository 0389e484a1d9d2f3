"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging messages to stdout for development.
"""

import logging
from uuid import uuid4

from src.domain.ports import EmailMessage

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints the plain-text body (and so the
    action link) to stdout.
    """

    def send(self, message: EmailMessage) -> str:
        """
        Log the message to console (simulates email delivery).

        Args:
            message: Message to "deliver"

        Returns:
            Generated message id
        """
        message_id = f"console-{uuid4().hex}"
        logger.info(
            "[EMAIL] To: %s Subject: %s Id: %s\n%s",
            message.to,
            message.subject,
            message_id,
            message.text,
        )
        return message_id
