"""
Mailgun email sender.

Sends transactional email through the Mailgun HTTP API. Requests are
bounded by MAILGUN_TIMEOUT_SECONDS and never retried here.
"""

import logging
from typing import Optional

import httpx

from shared.config import Settings

from .exceptions import DependencyUnavailableError, VerificationNotConfiguredError
from .models import EmailMessage

logger = logging.getLogger(__name__)


class MailgunMailer:
    """
    IMailer implementation backed by the Mailgun messages API.

    Example:
        mailer = MailgunMailer.from_settings(get_settings())
        await mailer.send(EmailMessage(to="a@b.c", subject="Hi", text="Hello"))
    """

    def __init__(
        self,
        api_key: str,
        domain: str,
        from_email: str,
        api_host: str = "https://api.mailgun.net",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the mailer.

        Args:
            api_key: Mailgun private API key
            domain: Sending domain registered with Mailgun
            from_email: Sender address
            api_host: API base URL (use https://api.eu.mailgun.net for EU)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self._api_key = api_key
        self._domain = domain
        self._from_email = from_email
        self._api_host = api_host.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "MailgunMailer":
        """Build a mailer from the MAILGUN_* settings."""
        return cls(
            api_key=settings.mailgun_api_key,
            domain=settings.mailgun_domain,
            from_email=settings.mailgun_from_email,
            api_host=settings.mailgun_api_host,
            timeout=settings.mailgun_timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._domain and self._from_email)

    @property
    def messages_url(self) -> str:
        return f"{self._api_host}/v3/{self._domain}/messages"

    async def send(self, message: EmailMessage) -> None:
        """
        Send a message through Mailgun.

        Raises:
            VerificationNotConfiguredError: If credentials are missing
            DependencyUnavailableError: On timeout, network error, or non-2xx reply
        """
        if not self.configured:
            raise VerificationNotConfiguredError(
                "Mailgun is not configured. Set MAILGUN_API_KEY, MAILGUN_DOMAIN "
                "and MAILGUN_FROM_EMAIL."
            )

        data = {
            "from": self._from_email,
            "to": message.to,
            "subject": message.subject,
            "text": message.text,
        }
        if message.html:
            data["html"] = message.html

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.messages_url,
                    auth=("api", self._api_key),
                    data=data,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = e.response.text or str(e)
            logger.error("Mailgun rejected message to %s: %s", message.to, detail)
            raise DependencyUnavailableError("mailgun", detail) from e
        except httpx.HTTPError as e:
            logger.error("Mailgun request failed for %s: %s", message.to, e)
            raise DependencyUnavailableError("mailgun", str(e) or e.__class__.__name__) from e

        logger.info("Email sent to %s via Mailgun", message.to)
