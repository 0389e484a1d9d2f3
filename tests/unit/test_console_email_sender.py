"""
Unit tests for ConsoleEmailSender adapter.

Tests verify the console email sender implements EmailSender protocol
and logs messages in the correct format.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.adapters.mail.console import ConsoleEmailSender
from src.domain.messages import verification_email


class TestConsoleEmailSenderProtocol:
    """Tests for EmailSender protocol compliance."""

    def test_implements_email_sender_protocol(self) -> None:
        """ConsoleEmailSender implements EmailSender protocol."""
        from src.domain.ports import EmailSender

        sender = ConsoleEmailSender()
        assert callable(sender.send)

        def accepts_email_sender(s: EmailSender) -> None:
            pass

        accepts_email_sender(sender)

    def test_no_explicit_inheritance(self) -> None:
        """ConsoleEmailSender uses structural subtyping, not inheritance."""
        assert ConsoleEmailSender.__bases__ == (object,)


class TestSend:
    """Tests for send method."""

    def test_send_logs_message(self, caplog: pytest.LogCaptureFixture) -> None:
        """Message is logged at INFO level."""
        sender = ConsoleEmailSender()

        with caplog.at_level(logging.INFO):
            sender.send(verification_email("test@example.com", "https://link/verify?oobCode=abc"))

        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.INFO

    def test_send_format(self, caplog: pytest.LogCaptureFixture) -> None:
        """Log format: [EMAIL] To: ... Subject: ... followed by the text body."""
        sender = ConsoleEmailSender()

        with caplog.at_level(logging.INFO):
            sender.send(verification_email("user@example.com", "https://link/verify?oobCode=xyz"))

        assert "[EMAIL]" in caplog.text
        assert "To: user@example.com" in caplog.text
        assert "Subject: Verify your email" in caplog.text
        assert "https://link/verify?oobCode=xyz" in caplog.text

    def test_send_returns_unique_message_ids(self) -> None:
        sender = ConsoleEmailSender()
        message = verification_email("a@x.com", "https://link")
        first = sender.send(message)
        second = sender.send(message)
        assert first.startswith("console-")
        assert first != second

    def test_concurrent_sends(self, caplog: pytest.LogCaptureFixture) -> None:
        """Sender is safe to call from the request threadpool."""
        sender = ConsoleEmailSender()
        messages = [verification_email(f"user{i}@example.com", f"https://link/{i}") for i in range(10)]

        with caplog.at_level(logging.INFO), ThreadPoolExecutor(max_workers=5) as executor:
            ids = list(executor.map(sender.send, messages))

        assert len(set(ids)) == 10
        for i in range(10):
            assert f"user{i}@example.com" in caplog.text
