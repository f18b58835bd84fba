# apps/cms/templatetags/cms_images.py
from __future__ import annotations

from urllib.parse import urlencode

from django import template
from django.conf import settings
from django.templatetags.static import static
from django.urls import reverse

from apps.cms.images import is_allowed_remote_image
from apps.cms.portable_text import render_portable_text

register = template.Library()


def _placeholder() -> str:
    return static(getattr(settings, "REMOTE_IMAGE_PLACEHOLDER", "img/placeholder.svg"))


@register.filter(name="remote_image")
def remote_image(url):
    """Allowed remote URL as-is, anything else becomes the local placeholder."""
    if is_allowed_remote_image(url):
        return url
    return _placeholder()


@register.filter(name="proxied_image")
def proxied_image(url):
    """Same-origin URL served through the image proxy."""
    if not is_allowed_remote_image(url):
        return _placeholder()
    return f"{reverse('cms:image')}?{urlencode({'url': url})}"


@register.filter(name="portable_text")
def portable_text(blocks):
    return render_portable_text(blocks)
