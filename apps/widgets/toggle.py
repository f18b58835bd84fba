from __future__ import annotations

from django.http import HttpResponseRedirect
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.i18n.views import safe_next_url
from apps.theme.context import normalize_mode, opposite_mode, theme_cookie_name

THEME_COOKIE_MAX_AGE = 60 * 60 * 24 * 365


# Rendered pages are cached and shared, so the toggle form carries no CSRF token.
@method_decorator(csrf_exempt, name="dispatch")
class ThemeToggleView(View):
    """POST /theme/toggle/: flip light/dark and go back to the page."""

    http_method_names = ["post"]

    def post(self, request, *args, **kwargs):
        current = normalize_mode(request.COOKIES.get(theme_cookie_name()))
        response = HttpResponseRedirect(safe_next_url(request))
        response.set_cookie(theme_cookie_name(), opposite_mode(current), max_age=THEME_COOKIE_MAX_AGE, samesite="Lax")
        return response
