from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Iterable, Mapping, Tuple
from uuid import uuid4

from django.conf import settings
from django.core.cache import cache as djcache

"""
Render cache with tag- and path-based invalidation.

- Each entry records the version of every tag it was stored with.
- Revalidating a tag swaps its version; entries holding the old one are stale.
- Paths are tags too (``path:/events``), so pages and content share one mechanism.
"""

log = logging.getLogger("cms.cache")

_NS = "cms:render:"
_TAG_NS = "cms:tag:"
_PATH_PREFIX = "path:"


def _ns(key: str) -> str:
    return f"{_NS}{key}"


def _tag_key(tag: str) -> str:
    return f"{_TAG_NS}{tag}"


def default_timeout() -> int:
    try:
        return max(1, int(getattr(settings, "CMS_CACHE_TIMEOUT", 3600)))
    except (TypeError, ValueError):
        return 3600


def normalize_path(path: str) -> str:
    value = (path or "").strip()
    if not value.startswith("/"):
        value = "/" + value
    if len(value) > 1:
        value = value.rstrip("/") or "/"
    return value


def path_tag(path: str) -> str:
    return f"{_PATH_PREFIX}{normalize_path(path)}"


def build_key(*parts: Any) -> str:
    raw = json.dumps(parts, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


def tag_versions(tags: Iterable[str]) -> dict[str, str]:
    tags = list(dict.fromkeys(tags))
    if not tags:
        return {}
    found = djcache.get_many([_tag_key(tag) for tag in tags])
    return {tag: found.get(_tag_key(tag), "") for tag in tags}


def get_entry(key: str) -> Tuple[bool, Any]:
    if not key or not isinstance(key, str):
        return False, None
    entry = djcache.get(_ns(key))
    if not isinstance(entry, dict):
        return False, None
    stored: Mapping[str, str] = entry.get("versions") or {}
    if stored and tag_versions(stored.keys()) != dict(stored):
        return False, None
    return True, entry.get("value")


def set_entry(key: str, value: Any, tags: Iterable[str] = (), timeout: int | None = None) -> None:
    if not key or not isinstance(key, str):
        return
    ttl = default_timeout() if timeout is None else max(1, int(timeout))
    djcache.set(_ns(key), {"value": value, "versions": tag_versions(tags)}, ttl)


def revalidate_tag(tag: str) -> None:
    if not isinstance(tag, str) or not tag.strip():
        raise ValueError(f"Invalid cache tag: {tag!r}")
    # Tag versions never expire on their own; an evicted version only means a miss.
    djcache.set(_tag_key(tag.strip()), uuid4().hex, None)
    log.info("cache_tag_revalidated", extra={"tag": tag})


def revalidate_path(path: str) -> None:
    if not isinstance(path, str) or not path.strip():
        raise ValueError(f"Invalid cache path: {path!r}")
    revalidate_tag(path_tag(path))
