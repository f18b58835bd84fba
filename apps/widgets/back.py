from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BackButton:
    label: str
    url: str
    hover_label: str = "←"
