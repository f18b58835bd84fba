from __future__ import annotations

from django.conf import settings

from .context import resolve_language

RTL_LANGUAGES = {code.split("-")[0] for code in getattr(settings, "RTL_LANGUAGES", {"ar"})}


def language_direction(request):
    lang = resolve_language(request)
    is_rtl = lang in RTL_LANGUAGES
    return {
        "lang_code": lang,
        "lang_dir": "rtl" if is_rtl else "ltr",
        "is_rtl": is_rtl,
        "available_languages": getattr(settings, "LANGUAGES", []),
    }


__all__ = ["language_direction"]
