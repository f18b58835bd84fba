"""Theme colour name -> precomputed style bundle."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

DEFAULT_COLOR = "teal"

# Tailwind 600 shade of every colour editors can pick in the CMS.
ACCENT_HEX: Mapping[str, str] = MappingProxyType(
    {
        "red": "#dc2626",
        "rose": "#e11d48",
        "pink": "#db2777",
        "fuchsia": "#c026d3",
        "purple": "#9333ea",
        "violet": "#7c3aed",
        "indigo": "#4f46e5",
        "blue": "#2563eb",
        "sky": "#0284c7",
        "cyan": "#0891b2",
        "teal": "#0d9488",
        "emerald": "#059669",
        "green": "#16a34a",
        "lime": "#65a30d",
        "yellow": "#ca8a04",
        "amber": "#d97706",
        "orange": "#ea580c",
        "stone": "#57534e",
        "neutral": "#525252",
        "zinc": "#52525b",
        "gray": "#4b5563",
        "slate": "#475569",
    }
)

COLOR_NAMES: tuple[str, ...] = tuple(ACCENT_HEX)


@dataclass(frozen=True)
class ButtonThemeClasses:
    """Style bundle for one colour; shared by buttons, links and the loader."""

    color: str
    primary: str
    hover: str
    outline: str
    text: str
    border: str
    ring: str
    accent: str
    accent_hex: str


def _build(color: str) -> ButtonThemeClasses:
    return ButtonThemeClasses(
        color=color,
        primary=f"bg-{color}-600 hover:bg-{color}-700 text-white",
        hover=f"hover:bg-{color}-700",
        outline=f"border border-{color}-600 text-{color}-600 hover:bg-{color}-600 hover:text-white",
        text=f"text-{color}-600",
        border=f"border-{color}-600",
        ring=f"focus:ring-{color}-500",
        accent=f"bg-{color}-600",
        accent_hex=ACCENT_HEX[color],
    )


_BUNDLES: Mapping[str, ButtonThemeClasses] = MappingProxyType({name: _build(name) for name in COLOR_NAMES})


def normalize_color(name: object) -> str:
    value = name.strip().lower() if isinstance(name, str) else ""
    return value if value in _BUNDLES else DEFAULT_COLOR


def get_button_theme(name: object) -> ButtonThemeClasses:
    """Bundle for ``name``; unknown or empty names get the teal bundle."""
    return _BUNDLES[normalize_color(name)]
