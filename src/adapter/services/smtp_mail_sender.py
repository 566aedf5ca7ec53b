"""
SMTP Mail Sender

Delivers plain-text mail through an SMTP relay.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from libs.result import Error, Result, Return
from src.app.services.mail_sender import IMailSender
from src.domain.errors import ErrorCode

logger = logging.getLogger(__name__)


class SmtpMailSender(IMailSender):
    """
    IMailSender backed by smtplib.

    The blocking SMTP conversation runs in a worker thread so the event loop
    is never held. With MAIL_ENABLED off, messages are dropped after logging
    the recipient and subject.
    """

    def __init__(self, config):
        self.enabled = config.MAIL_ENABLED
        self.host = config.SMTP_HOST
        self.port = config.SMTP_PORT
        self.username = config.SMTP_USERNAME
        self.password = config.SMTP_PASSWORD
        self.use_tls = config.SMTP_USE_TLS
        self.timeout = config.SMTP_TIMEOUT
        self.sender = config.MAIL_FROM

    def _build_message(self, to_address: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content(body)
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(message)

    async def send(self, to_address: str, subject: str, body: str) -> Result[None]:
        if not self.enabled:
            logger.info("Mail delivery disabled, dropping '%s' to %s", subject, to_address)
            return Return.ok(None)

        message = self._build_message(to_address, subject, body)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(
                "Mail delivery to %s failed: %s", to_address, exc.__class__.__name__
            )
            return Return.err(
                Error(ErrorCode.DELIVERY_FAILED, "Email could not be sent")
            )

        logger.info("Mail '%s' sent to %s", subject, to_address)
        return Return.ok(None)
