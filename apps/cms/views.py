from __future__ import annotations

import logging

import requests
from django.conf import settings
from django.http import HttpResponse, HttpResponseBadRequest
from django.views import View

from .images import is_allowed_remote_image

log = logging.getLogger("cms.images")

_PASSTHROUGH_TYPES = ("image/",)


class ImageProxyView(View):
    """
    Serves an allowlisted remote image from the site's own origin.

    GET /_image?url=<remote url>
    - 400 when the URL is missing or not in REMOTE_IMAGE_PATTERNS
    - 502 when the upstream host fails or answers with something other than an image
    """

    http_method_names = ["get", "head"]

    def get(self, request, *args, **kwargs):
        url = (request.GET.get("url") or "").strip()
        if not is_allowed_remote_image(url):
            return HttpResponseBadRequest("Image URL not allowed")

        try:
            upstream = requests.get(url, timeout=getattr(settings, "REMOTE_IMAGE_TIMEOUT", 10))
            upstream.raise_for_status()
        except requests.RequestException as exc:
            log.warning("image_proxy_upstream_failed", extra={"url": url, "error": exc.__class__.__name__})
            return HttpResponse("Upstream image unavailable", status=502)

        content_type = upstream.headers.get("Content-Type", "")
        if not content_type.startswith(_PASSTHROUGH_TYPES):
            log.warning("image_proxy_bad_content_type", extra={"url": url, "content_type": content_type})
            return HttpResponse("Upstream image unavailable", status=502)

        response = HttpResponse(upstream.content, content_type=content_type)
        response["Cache-Control"] = f"public, max-age={int(getattr(settings, 'REMOTE_IMAGE_MAX_AGE', 86400))}"
        return response
