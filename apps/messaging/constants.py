"""Typed constants used across messaging endpoints."""
from __future__ import annotations

SUBMISSION_TYPE_NEWSLETTER = "newsletter"
SUBMISSION_TYPE_CONTACT = "contact"

ERROR_EMAIL_REQUIRED = "Email is required"
ERROR_EMAIL_INVALID = "Invalid email address"
ERROR_MESSAGE_REQUIRED = "Message is required"
ERROR_SEND_FAILED = "Failed to send email"

SUCCESS_NEWSLETTER = "Successfully subscribed to newsletter"
SUCCESS_CONTACT = "Email sent successfully"

DEFAULT_SITE_NAME = "Kamayakoi"
