"""Minimal client for the Resend transactional email API."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import requests
from django.conf import settings

from .exceptions import EmailRelayConfigError, EmailRelayError

log = logging.getLogger("messaging.relay")


@dataclass(frozen=True)
class OutboundEmail:
    sender: str
    to: Sequence[str]
    subject: str
    html: str
    text: str = ""
    reply_to: Optional[str] = None

    def as_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "from": self.sender,
            "to": list(self.to),
            "subject": self.subject,
            "html": self.html,
        }
        if self.text:
            payload["text"] = self.text
        if self.reply_to:
            payload["reply_to"] = self.reply_to
        return payload


class ResendClient:
    def __init__(self, api_key: str, *, api_url: str, timeout: int = 10, session: requests.Session | None = None) -> None:
        if not api_key:
            raise EmailRelayConfigError("RESEND_API_KEY is not configured")
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls) -> "ResendClient":
        return cls(
            getattr(settings, "RESEND_API_KEY", ""),
            api_url=getattr(settings, "RESEND_API_URL", "https://api.resend.com/emails"),
            timeout=int(getattr(settings, "RESEND_TIMEOUT", 10)),
        )

    def send(self, email: OutboundEmail) -> str:
        """POST one email; returns the provider message id."""
        try:
            response = self.session.post(
                self.api_url,
                json=email.as_payload(),
                headers={"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise EmailRelayError(f"Email API unreachable: {exc.__class__.__name__}") from exc

        if response.status_code >= 400:
            raise EmailRelayError(f"Email API answered {response.status_code}", status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            body = {}
        message_id = str((body or {}).get("id") or "")
        log.info("email_relayed", extra={"message_id": message_id, "subject": email.subject})
        return message_id
