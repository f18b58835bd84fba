from __future__ import annotations

import json
from dataclasses import dataclass

from apps.theme.context import ThemeContext

LOADING_SEQUENCE: tuple[int, ...] = (0, 18, 12, 35, 28, 58, 52, 78, 71, 95, 88, 100)
STEP_MS = 800


@dataclass(frozen=True)
class LoadingIndicator:
    """Loading bar fill steps; the accent colour follows the theme bundle."""

    accent_hex: str
    sequence: tuple[int, ...] = LOADING_SEQUENCE
    step_ms: int = STEP_MS

    @classmethod
    def for_theme(cls, theme: ThemeContext) -> "LoadingIndicator":
        return cls(accent_hex=theme.button.accent_hex)

    def step(self, index: int) -> int:
        """Fill width at tick ``index``; the sequence loops."""
        return self.sequence[index % len(self.sequence)]

    def data_attrs(self) -> dict[str, str]:
        return {
            "data-loader-sequence": json.dumps(list(self.sequence)),
            "data-loader-step": str(self.step_ms),
            "data-loader-accent": self.accent_hex,
        }
