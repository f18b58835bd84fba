from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from django.http import HttpRequest

from apps.cms.viewmodels import HomepageContent, PromoEvent
from apps.i18n.context import TranslationContext
from apps.theme.context import ThemeContext
from apps.widgets.loader import LoadingIndicator


@dataclass(frozen=True)
class Navigation:
    show_blog: bool = True
    show_archives: bool = True
    tickets_button_location: str = "header"
    promo_event: Optional[PromoEvent] = None

    @classmethod
    def from_homepage(cls, homepage: Optional[HomepageContent]) -> "Navigation":
        if homepage is None:
            return cls()
        return cls(
            show_blog=homepage.show_blog_in_navigation,
            show_archives=homepage.show_archives_in_navigation,
            tickets_button_location=homepage.tickets_button_location,
            promo_event=homepage.promo_event,
        )

    @property
    def tickets_url(self) -> Optional[str]:
        if self.promo_event is None:
            return None
        return f"/events/{self.promo_event.slug}/"


@dataclass(frozen=True)
class PageContext:
    """Everything a template needs besides its own content, built once per request."""

    theme: ThemeContext
    i18n: TranslationContext
    navigation: Navigation = field(default_factory=Navigation)
    loader: Optional[LoadingIndicator] = None

    @classmethod
    def build(cls, request: HttpRequest, homepage: Optional[HomepageContent] = None) -> "PageContext":
        theme = ThemeContext.from_request(request, homepage.primary_button_color if homepage else None)
        return cls(
            theme=theme,
            i18n=TranslationContext.from_request(request),
            navigation=Navigation.from_homepage(homepage),
            loader=LoadingIndicator.for_theme(theme),
        )

    @property
    def lang(self) -> str:
        return self.i18n.current_language

    def t(self, key: str) -> str:
        return self.i18n.t(key)
