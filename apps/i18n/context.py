from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable

from django.conf import settings
from django.http import HttpRequest

from .catalog import default_language, normalize_language, translate


def language_cookie_name() -> str:
    return getattr(settings, "LANGUAGE_COOKIE_NAME", "lang")


def _from_accept_language(header: str) -> str:
    ranked = []
    for position, part in enumerate(header.split(",")):
        tag, _, params = part.strip().partition(";")
        quality = 1.0
        if params.strip().startswith("q="):
            try:
                quality = float(params.strip()[2:])
            except ValueError:
                quality = 0.0
        ranked.append((-quality, position, tag))
    for _q, _pos, tag in sorted(ranked):
        lang = normalize_language(tag)
        if lang:
            return lang
    return ""


def resolve_language(request: HttpRequest) -> str:
    """?lang= wins, then the lang cookie, then Accept-Language, then DEFAULT_LANGUAGE."""
    return (
        normalize_language(request.GET.get("lang"))
        or normalize_language(request.COOKIES.get(language_cookie_name()))
        or _from_accept_language(request.headers.get("Accept-Language", ""))
        or default_language()
    )


@dataclass(frozen=True)
class TranslationContext:
    current_language: str

    @classmethod
    def from_request(cls, request: HttpRequest) -> "TranslationContext":
        return cls(current_language=resolve_language(request))

    @property
    def t(self) -> Callable[[str], str]:
        return partial(translate, self.current_language)

