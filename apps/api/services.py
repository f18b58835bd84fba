"""Business logic behind the public JSON endpoints."""
from __future__ import annotations

import hmac
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from apps.cms import cache
from apps.cms.viewmodels import ArchiveImageRecord

log = logging.getLogger("api.revalidate")

DEFAULT_TAGS: tuple[str, ...] = ("events", "posts", "products", "homepage", "artists", "media")
DEFAULT_PATHS: tuple[str, ...] = ("/",)

DEFAULT_WIDTH = "720"
DEFAULT_HEIGHT = "480"


# ================================= Revalidation ================================

@dataclass
class RevalidationReport:
    tags: list[str] = field(default_factory=list)
    paths: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    used_defaults: bool = False


def _each(kind: str, items: Iterable[Any], apply: Callable[[str], None], done: list[str], failed: list[str]) -> None:
    for item in items:
        try:
            apply(item)
        except Exception:
            # One bad entry must not stop the rest.
            log.exception("revalidate_item_failed", extra={"kind": kind, "item": repr(item)})
            failed.append(f"{kind}:{item!r}")
            continue
        done.append(item)
        log.info("revalidated", extra={"kind": kind, "item": item})


def _blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, (str, int, float)) and not value


def revalidate(payload: Mapping[str, Any]) -> RevalidationReport:
    """
    Apply a revalidation request.

    - ``tags`` / ``paths`` given as lists are revalidated item by item.
    - When neither key carries a value (missing, null, false, 0 or "") the
      default set is used. A list, even an empty one, counts as a value.
    - Other non-list values are ignored.
    """
    tags = payload.get("tags")
    paths = payload.get("paths")
    report = RevalidationReport()

    if isinstance(tags, list):
        _each("tag", tags, cache.revalidate_tag, report.tags, report.failed)
    if isinstance(paths, list):
        _each("path", paths, cache.revalidate_path, report.paths, report.failed)

    if _blank(tags) and _blank(paths):
        report.used_defaults = True
        _each("tag", DEFAULT_TAGS, cache.revalidate_tag, report.tags, report.failed)
        _each("path", DEFAULT_PATHS, cache.revalidate_path, report.paths, report.failed)
        log.info("revalidated_defaults")

    return report


def check_secret(expected: Optional[str], header_secret: Optional[str], authorization: Optional[str]) -> bool:
    """An empty ``expected`` secret leaves the endpoint open."""
    if not expected:
        return True
    provided = (header_secret or "").strip()
    if not provided and authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer":
            provided = value.strip()
    if not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


# ================================= Gallery ================================

def format_dimension(value: Any, default: str) -> str:
    """String form of a numeric dimension; missing or non-finite values use ``default``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float):
        if not math.isfinite(value):
            return default
        if value.is_integer():
            return str(int(value))
    return str(value)


def build_gallery_items(records: Sequence[ArchiveImageRecord]) -> list[dict[str, Any]]:
    """Index records with a URL by position, then put tagged items first."""
    items = []
    for index, record in enumerate(r for r in records if r.image_url):
        items.append(
            {
                "id": index,
                "width": format_dimension(record.width, DEFAULT_WIDTH),
                "height": format_dimension(record.height, DEFAULT_HEIGHT),
                "url": record.image_url,
                "tags": [record.category] if record.category else [],
            }
        )
    items.sort(key=lambda item: (0 if item["tags"] else 1, item["id"]))
    return items
