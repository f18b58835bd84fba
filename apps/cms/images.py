"""Remote image allowlist: which hosts and paths the image layer may serve."""
from __future__ import annotations

import logging
from fnmatch import fnmatchcase
from typing import Any, Iterable, List, Literal, Mapping, Optional
from urllib.parse import urlsplit

from django.conf import settings
from pydantic import BaseModel, ValidationError, field_validator

log = logging.getLogger("cms.images")


class RemoteImagePattern(BaseModel):
    protocol: Literal["https", "http"] = "https"
    hostname: str
    pathname: str = "/**"

    @field_validator("hostname")
    @classmethod
    def _lower_host(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("hostname must not be empty")
        return value

    def matches(self, scheme: str, host: str, path: str) -> bool:
        if scheme != self.protocol or host != self.hostname:
            return False
        # "**" spans segments; fnmatch "*" already does.
        return fnmatchcase(path, self.pathname.replace("**", "*"))


def load_patterns(raw: Optional[Iterable[Mapping[str, Any]]] = None) -> List[RemoteImagePattern]:
    """Validated patterns from ``raw`` or REMOTE_IMAGE_PATTERNS; invalid entries are skipped."""
    source = raw if raw is not None else (getattr(settings, "REMOTE_IMAGE_PATTERNS", None) or ())
    patterns: List[RemoteImagePattern] = []
    for entry in source:
        if isinstance(entry, RemoteImagePattern):
            patterns.append(entry)
            continue
        try:
            patterns.append(RemoteImagePattern.model_validate(entry))
        except ValidationError as exc:
            log.warning("remote_image_pattern_invalid", extra={"pattern": repr(entry), "errors": exc.error_count()})
    return patterns


def is_allowed_remote_image(url: Optional[str], patterns: Optional[Iterable[Mapping[str, Any]]] = None) -> bool:
    """True when ``url`` matches one of the configured remote image patterns."""
    if not url or not isinstance(url, str):
        return False
    try:
        parts = urlsplit(url.strip())
        if parts.username or parts.password or parts.port:
            return False
    except ValueError:
        return False
    scheme = (parts.scheme or "").lower()
    host = (parts.hostname or "").lower()
    path = parts.path or "/"
    if not scheme or not host:
        return False
    for pattern in load_patterns(patterns):
        if pattern.matches(scheme, host, path):
            return True
    log.debug("remote_image_rejected", extra={"host": host})
    return False
