from __future__ import annotations

import logging

import requests

from examgate.config import MAIL_TIMEOUT_SECONDS, get_mail_settings
from examgate.errors import ConfigurationError, DeliveryFailed

log = logging.getLogger(__name__)


class MailService:
    """Sends plain-text messages through an HTTP mail API (Postal style)."""

    def __init__(
        self,
        url: str,
        api_key: str | None,
        recipient: str | None,
        sender: str | None,
        timeout: int = MAIL_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.api_key = api_key
        self.recipient = recipient
        self.sender = sender
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls) -> "MailService":
        settings = get_mail_settings()
        return cls(
            url=settings["url"],
            api_key=settings["api_key"],
            recipient=settings["recipient"],
            sender=settings["sender"],
        )

    def _check_configured(self) -> None:
        if not self.api_key:
            log.error("MAIL_API_KEY environment variable is not set")
            raise ConfigurationError("MAIL_API_KEY is not configured")
        if not self.recipient or not self.sender:
            log.error("MAIL_RECIPIENT or MAIL_SENDER is not set")
            raise ConfigurationError("Mail addresses are not configured")

    def deliver(self, subject: str, body: str) -> None:
        """
        Send one message.
        Raises DeliveryFailed if the mail API rejects it or cannot be reached.
        """
        self._check_configured()
        log.info("Sending test results to %s", self.recipient)
        log.info("Subject: %s", subject)

        try:
            response = self.session.post(
                self.url,
                json={
                    "to": [self.recipient],
                    "from": self.sender,
                    "subject": subject,
                    "plain_body": body,
                },
                headers={"X-Server-API-Key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.error("Mail API request failed: %s", exc)
            raise DeliveryFailed() from exc

        try:
            payload = response.json()
        except ValueError as exc:
            log.error("Mail API returned non-JSON: %s", response.text)
            raise DeliveryFailed("Invalid response from mail server") from exc

        if not isinstance(payload, dict) or payload.get("status") != "success":
            log.error("Mail API error: %s", response.text)
            raise DeliveryFailed()

        log.info("Email sent successfully")
