"""Django system checks guarding e-mail relay configuration."""
from __future__ import annotations

from django.conf import settings
from django.core.checks import Tags, Warning, register


@register(Tags.compatibility)
def email_relay_checks(app_configs=None, **kwargs):  # noqa: D401 - Django signature
    warnings: list[Warning] = []

    if not getattr(settings, "RESEND_API_KEY", ""):
        warnings.append(Warning("RESEND_API_KEY is not set; contact and newsletter forms will fail", id="messaging.W001"))

    for name in ("NEWSLETTER_FROM_EMAIL", "NEWSLETTER_TO_EMAIL"):
        if not getattr(settings, name, ""):
            warnings.append(Warning(f"{name} must be set", id="messaging.W002"))

    return warnings


__all__ = ["email_relay_checks"]
