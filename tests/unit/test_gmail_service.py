"""Unit tests for the Gmail API sender."""

import base64
from email import message_from_bytes
from email.message import Message
from unittest.mock import MagicMock, patch

from payment_monitor.services.gmail_service import (
    GOOGLE_TOKEN_URI,
    GmailSender,
    build_message,
)


def _decode(raw: str) -> Message:
    padded = raw + "=" * (-len(raw) % 4)
    return message_from_bytes(base64.urlsafe_b64decode(padded))


class TestBuildMessage:
    def test_message_is_base64url_without_padding(self):
        raw = build_message(to="admin@example.com", subject="Hi", body="Body text")

        assert "=" not in raw
        assert "+" not in raw
        assert "/" not in raw

    def test_headers_and_body(self):
        raw = build_message(
            to="admin@example.com",
            subject="Payment Failed Alert - a@b.com",
            body="- Amount: $25.00 USD",
        )
        message = _decode(raw)

        assert message["To"] == "admin@example.com"
        assert message["Subject"] == "Payment Failed Alert - a@b.com"
        assert message.get_content_type() == "text/plain"
        assert message.get_content_charset() == "utf-8"
        assert "$25.00 USD" in message.get_payload(decode=True).decode("utf-8")


class TestGmailSender:
    def test_send_calls_gmail_api(self):
        service = MagicMock()
        service.users.return_value.messages.return_value.send.return_value.execute.return_value = {
            "id": "msg_1"
        }
        sender = GmailSender(
            client_id="cid", client_secret="secret", refresh_token="token", service=service
        )

        sender.send(to="admin@example.com", subject="Subject", body="Body")

        send = service.users.return_value.messages.return_value.send
        send.assert_called_once()
        assert send.call_args.kwargs["userId"] == "me"
        assert "raw" in send.call_args.kwargs["body"]

    def test_client_is_built_lazily_from_refresh_token(self):
        with (
            patch("payment_monitor.services.gmail_service.build") as mock_build,
            patch("payment_monitor.services.gmail_service.Credentials") as mock_credentials,
        ):
            sender = GmailSender(client_id="cid", client_secret="secret", refresh_token="token")
            mock_build.assert_not_called()

            sender.send(to="admin@example.com", subject="s", body="b")
            sender.send(to="admin@example.com", subject="s", body="b")

        mock_build.assert_called_once_with(
            "gmail", "v1", credentials=mock_credentials.return_value, cache_discovery=False
        )
        credential_kwargs = mock_credentials.call_args.kwargs
        assert credential_kwargs["refresh_token"] == "token"
        assert credential_kwargs["client_id"] == "cid"
        assert credential_kwargs["client_secret"] == "secret"
        assert credential_kwargs["token_uri"] == GOOGLE_TOKEN_URI
