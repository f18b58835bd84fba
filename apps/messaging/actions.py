"""Contact and newsletter form action."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.utils import timezone
from django.utils.html import escape, linebreaks

from .constants import (
    DEFAULT_SITE_NAME,
    ERROR_EMAIL_INVALID,
    ERROR_EMAIL_REQUIRED,
    ERROR_MESSAGE_REQUIRED,
    ERROR_SEND_FAILED,
    SUBMISSION_TYPE_CONTACT,
    SUBMISSION_TYPE_NEWSLETTER,
    SUCCESS_CONTACT,
    SUCCESS_NEWSLETTER,
)
from .metrics import record_submission
from .resend import OutboundEmail, ResendClient

log = logging.getLogger("messaging.relay")


def _field(data: Mapping[str, Any], name: str) -> str:
    value = data.get(name)
    if value is None:
        return ""
    return str(value).strip()


def validate_submission(data: Mapping[str, Any]) -> str | None:
    """Error message for an invalid submission, ``None`` when it can be relayed."""
    email = _field(data, "email")
    if not email:
        return ERROR_EMAIL_REQUIRED
    try:
        validate_email(email)
    except ValidationError:
        return ERROR_EMAIL_INVALID
    if _field(data, "type") != SUBMISSION_TYPE_NEWSLETTER and not _field(data, "message"):
        return ERROR_MESSAGE_REQUIRED
    return None


def build_email(data: Mapping[str, Any]) -> OutboundEmail:
    email = _field(data, "email")
    submitted_at = timezone.now().isoformat()
    site = getattr(settings, "SEO_DEFAULTS", {}).get("site_name", DEFAULT_SITE_NAME)
    sender = settings.NEWSLETTER_FROM_EMAIL
    recipient = settings.NEWSLETTER_TO_EMAIL

    if _field(data, "type") == SUBMISSION_TYPE_NEWSLETTER:
        return OutboundEmail(
            sender=sender,
            to=[recipient],
            subject=f"New newsletter subscription - {site}",
            html=(
                "<h2>New newsletter subscription</h2>"
                f"<p><strong>Email:</strong> {escape(email)}</p>"
                f"<p><strong>Subscribed at:</strong> {escape(submitted_at)}</p>"
            ),
            text=f"New newsletter subscription\nEmail: {email}\nSubscribed at: {submitted_at}",
        )

    name = _field(data, "name")
    message = _field(data, "message")
    return OutboundEmail(
        sender=sender,
        to=[recipient],
        subject=f"New contact message from {name or email}",
        html=(
            "<h2>New contact message</h2>"
            f"<p><strong>From:</strong> {escape(name)} &lt;{escape(email)}&gt;</p>"
            f"<p><strong>Sent at:</strong> {escape(submitted_at)}</p>"
            f"{linebreaks(message, autoescape=True)}"
        ),
        text=f"From: {name} <{email}>\nSent at: {submitted_at}\n\n{message}",
        reply_to=email,
    )


def submit_contact(data: Mapping[str, Any], client: ResendClient | None = None) -> dict[str, str]:
    """
    Validate a contact/newsletter submission and relay it by email.

    Returns ``{"success": ...}`` or ``{"error": ...}``; never raises.
    """
    kind = SUBMISSION_TYPE_NEWSLETTER if _field(data, "type") == SUBMISSION_TYPE_NEWSLETTER else SUBMISSION_TYPE_CONTACT
    error = validate_submission(data)
    if error:
        log.info("submission_rejected", extra={"reason": error})
        record_submission(kind, "rejected")
        return {"error": error}

    try:
        relay = client or ResendClient.from_settings()
        relay.send(build_email(data))
    except Exception:
        log.exception("submission_relay_failed", extra={"kind": kind})
        record_submission(kind, "failed")
        return {"error": ERROR_SEND_FAILED}

    log.info("submission_relayed", extra={"kind": kind})
    record_submission(kind, "sent")
    return {"success": SUCCESS_NEWSLETTER if kind == SUBMISSION_TYPE_NEWSLETTER else SUCCESS_CONTACT}
