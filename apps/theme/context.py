from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.http import HttpRequest

from .button_colors import ButtonThemeClasses, get_button_theme, normalize_color

MODES = ("light", "dark")
DEFAULT_MODE = "light"


def theme_cookie_name() -> str:
    return getattr(settings, "THEME_COOKIE_NAME", "theme")


def normalize_mode(value: Optional[str]) -> str:
    value = (value or "").strip().lower()
    return value if value in MODES else DEFAULT_MODE


def opposite_mode(mode: str) -> str:
    return "light" if normalize_mode(mode) == "dark" else "dark"


@dataclass(frozen=True)
class ThemeContext:
    """Theme values handed to every page: CMS colour, its style bundle, light/dark mode."""

    primary_button_color: str
    button: ButtonThemeClasses
    mode: str = DEFAULT_MODE

    @classmethod
    def build(cls, primary_button_color: Optional[str] = None, mode: Optional[str] = None) -> "ThemeContext":
        color = normalize_color(primary_button_color)
        return cls(primary_button_color=color, button=get_button_theme(color), mode=normalize_mode(mode))

    @classmethod
    def from_request(cls, request: HttpRequest, primary_button_color: Optional[str] = None) -> "ThemeContext":
        return cls.build(primary_button_color, request.COOKIES.get(theme_cookie_name()))

    @property
    def is_dark(self) -> bool:
        return self.mode == "dark"
