"""Gmail API email sender.

Authenticates with an OAuth2 refresh token and sends plain-text messages
from the authorized account (``userId="me"``).
"""

import base64
import logging
from email.mime.text import MIMEText
from typing import Any, Protocol

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
GMAIL_SEND_SCOPE = "https://www.googleapis.com/auth/gmail.send"


class EmailSender(Protocol):
    """Anything that can deliver a plain-text email."""

    def send(self, *, to: str, subject: str, body: str) -> None: ...


def build_message(*, to: str, subject: str, body: str) -> str:
    """Build a base64url-encoded MIME message for the Gmail API.

    Args:
        to: Recipient address
        subject: Subject line
        body: Plain-text body

    Returns:
        The ``raw`` value expected by users.messages.send.
    """
    message = MIMEText(body, "plain", "utf-8")
    message["To"] = to
    message["Subject"] = subject
    return base64.urlsafe_b64encode(message.as_bytes()).decode("ascii").rstrip("=")


class GmailSender:
    """Sends email through the Gmail API.

    The API client is built lazily on first send so that a misconfigured
    mailbox never prevents the service from starting.
    """

    def __init__(
        self,
        *,
        client_id: str | None,
        client_secret: str | None,
        refresh_token: str | None,
        service: Any | None = None,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self._refresh_token = refresh_token
        self._service = service

    def _get_service(self) -> Any:
        if self._service is None:
            credentials = Credentials(
                token=None,
                refresh_token=self._refresh_token,
                client_id=self._client_id,
                client_secret=self._client_secret,
                token_uri=GOOGLE_TOKEN_URI,
                scopes=[GMAIL_SEND_SCOPE],
            )
            self._service = build(
                "gmail", "v1", credentials=credentials, cache_discovery=False
            )
            logger.info("Gmail API client initialized")
        return self._service

    def send(self, *, to: str, subject: str, body: str) -> None:
        """Send a plain-text email.

        Raises:
            Exception: Whatever the Gmail client raises on auth or transport failure.
        """
        raw = build_message(to=to, subject=subject, body=body)
        response = (
            self._get_service()
            .users()
            .messages()
            .send(userId="me", body={"raw": raw})
            .execute()
        )
        logger.info("Gmail message sent: %s", response.get("id"))
