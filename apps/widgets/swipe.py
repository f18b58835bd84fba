from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from apps.cms.viewmodels import EventSummary

MIN_SWIPE_DISTANCE = 50


@dataclass(frozen=True)
class SwipeNavigation:
    """
    Neighbours of the current event in a newest-first list.

    Swiping left goes to ``next_url`` (newer), swiping right to ``previous_url`` (older).
    """

    previous_url: Optional[str] = None
    next_url: Optional[str] = None
    min_distance: int = MIN_SWIPE_DISTANCE

    @property
    def enabled(self) -> bool:
        return bool(self.previous_url or self.next_url)

    def data_attrs(self) -> dict[str, str]:
        return {
            "data-swipe-prev": self.previous_url or "",
            "data-swipe-next": self.next_url or "",
            "data-swipe-min": str(self.min_distance),
        }


def build_swipe_navigation(events: Sequence[EventSummary], current_slug: str) -> SwipeNavigation:
    slugs = [event.slug for event in events]
    if current_slug not in slugs:
        return SwipeNavigation()
    index = slugs.index(current_slug)
    newer = events[index - 1] if index > 0 else None
    older = events[index + 1] if index < len(events) - 1 else None
    return SwipeNavigation(
        previous_url=older.url if older else None,
        next_url=newer.url if newer else None,
    )
