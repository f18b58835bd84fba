from __future__ import annotations

from django.template.response import TemplateResponse

from ..context import PageContext


def page_not_found(request, exception=None):
    # Default theme; the content store is not consulted for 404s.
    return TemplateResponse(request, "404.html", {"page": PageContext.build(request)}, status=404)
