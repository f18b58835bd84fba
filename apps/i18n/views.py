from __future__ import annotations

from django.conf import settings
from django.http import Http404, HttpResponseRedirect
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View

from .catalog import normalize_language
from .context import language_cookie_name


def safe_next_url(request, default: str = "/") -> str:
    """``?next=`` or the referrer when it points back at this site."""
    for candidate in (request.GET.get("next"), request.headers.get("Referer")):
        if candidate and url_has_allowed_host_and_scheme(
            candidate,
            allowed_hosts={request.get_host()},
            require_https=request.is_secure(),
        ):
            return candidate
    return default


class SetLanguageView(View):
    """/lang/<code>/ stores the language in a cookie and goes back."""

    http_method_names = ["get", "post"]

    def get(self, request, code: str, *args, **kwargs):
        lang = normalize_language(code)
        if not lang or lang != code.lower():
            raise Http404("Unsupported language")
        response = HttpResponseRedirect(safe_next_url(request))
        response.set_cookie(
            language_cookie_name(),
            lang,
            max_age=getattr(settings, "LANGUAGE_COOKIE_MAX_AGE", None),
            samesite="Lax",
        )
        return response

    post = get
