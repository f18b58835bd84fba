"""Sanity content store client.

Thin wrapper over the HTTP query API: one GET per GROQ query, parameters
JSON-encoded as ``$name``, optional tag-aware caching through
:mod:`apps.cms.cache`.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterable, Mapping, Optional

import requests
from django.conf import settings

from . import cache
from .exceptions import ContentConfigError, ContentResponseError, ContentTransportError

log = logging.getLogger("cms.client")


@dataclass(frozen=True)
class ContentClientConfig:
    """Connection settings for one Sanity project/dataset."""

    project_id: str
    dataset: str
    api_version: str
    use_cdn: bool = False
    token: str = ""
    timeout: int = 10

    @classmethod
    def from_settings(cls) -> "ContentClientConfig":
        project_id = (getattr(settings, "SANITY_PROJECT_ID", "") or "").strip()
        dataset = (getattr(settings, "SANITY_DATASET", "") or "").strip()
        api_version = (getattr(settings, "SANITY_API_VERSION", "") or "").strip()
        if not project_id or not dataset or not api_version:
            raise ContentConfigError("SANITY_PROJECT_ID, SANITY_DATASET and SANITY_API_VERSION are required")
        return cls(
            project_id=project_id,
            dataset=dataset,
            api_version=api_version.lstrip("v"),
            use_cdn=bool(getattr(settings, "SANITY_USE_CDN", False)),
            token=getattr(settings, "SANITY_API_TOKEN", "") or "",
            timeout=int(getattr(settings, "SANITY_TIMEOUT", 10)),
        )

    @property
    def query_url(self) -> str:
        host = "apicdn.sanity.io" if self.use_cdn else "api.sanity.io"
        return f"https://{self.project_id}.{host}/v{self.api_version}/data/query/{self.dataset}"


def encode_params(query: str, params: Optional[Mapping[str, Any]] = None) -> dict[str, str]:
    encoded = {"query": query}
    for name, value in (params or {}).items():
        encoded[f"${name}"] = json.dumps(value)
    return encoded


class ContentClient:
    """Read-only client for the content store query API."""

    def __init__(self, config: ContentClientConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if config.token:
            self.session.headers.update({"Authorization": f"Bearer {config.token}"})

    def fetch(
        self,
        query: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        tags: Iterable[str] = (),
        revalidate: int | None = None,
    ) -> Any:
        """Run a GROQ query and return its ``result``.

        With ``tags`` the result goes through the render cache for ``revalidate``
        seconds, until one of the tags is revalidated.

        Raises:
            ContentTransportError: network failure, timeout or non-2xx answer.
            ContentResponseError: the answer carries no ``result`` member.
        """
        tags = tuple(tags)
        if not tags:
            return self._request(query, params)

        key = cache.build_key(self.config.query_url, query, dict(params or {}))
        hit, value = cache.get_entry(key)
        if hit:
            return value

        value = self._request(query, params)
        cache.set_entry(key, value, tags=tags, timeout=revalidate)
        return value

    def _request(self, query: str, params: Optional[Mapping[str, Any]]) -> Any:
        try:
            response = self.session.get(
                self.config.query_url,
                params=encode_params(query, params),
                timeout=self.config.timeout,
            )
        except requests.RequestException as exc:
            log.warning("content_request_failed", extra={"error": exc.__class__.__name__})
            raise ContentTransportError(f"Content store unreachable: {exc.__class__.__name__}") from exc

        if response.status_code >= 400:
            log.warning("content_request_rejected", extra={"status_code": response.status_code})
            raise ContentTransportError(
                f"Content store answered {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ContentTransportError("Content store answered with invalid JSON") from exc

        if not isinstance(payload, dict) or "result" not in payload:
            raise ContentResponseError("Content store answer has no result")

        log.debug("content_request_ok", extra={"ms": payload.get("ms")})
        return payload["result"]


@lru_cache(maxsize=1)
def get_client() -> ContentClient:
    """Process-wide client; configuration is frozen after the first call."""
    return ContentClient(ContentClientConfig.from_settings())
