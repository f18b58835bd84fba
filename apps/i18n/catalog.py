from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import yaml
from django.conf import settings

log = logging.getLogger("i18n.catalog")

_CatalogFingerprint = Tuple[float, int]

_catalog_cache: Dict[str, Tuple[_CatalogFingerprint | None, Dict[str, Any]]] = {}


def supported_languages() -> Sequence[str]:
    return tuple(code for code, _label in getattr(settings, "LANGUAGES", [("en", "English")]))


def default_language() -> str:
    lang = normalize_language(getattr(settings, "DEFAULT_LANGUAGE", "en"))
    return lang or "en"


def normalize_language(value: Optional[str]) -> str:
    """Primary subtag of ``value`` when supported, else ``""``."""
    if not value:
        return ""
    primary = str(value).strip().lower().replace("_", "-").split("-")[0]
    return primary if primary in supported_languages() else ""


def _catalog_dir() -> Path:
    configured = getattr(settings, "I18N_CATALOG_DIR", None)
    if configured:
        return Path(configured)
    return Path(settings.BASE_DIR) / "configs" / "i18n"


def _fingerprint(path: Path) -> _CatalogFingerprint | None:
    try:
        stat = path.stat()
    except FileNotFoundError:
        return None
    return (stat.st_mtime, stat.st_size)


def load_catalog(lang: str) -> Dict[str, Any]:
    """Parsed ``<lang>.yml``; reloaded only when the file changes."""
    path = _catalog_dir() / f"{lang}.yml"
    fingerprint = _fingerprint(path)

    cache_key = str(path)
    cached = _catalog_cache.get(cache_key)
    if cached and cached[0] == fingerprint:
        return cached[1]

    catalog: Dict[str, Any] = {}
    if fingerprint is not None:
        try:
            payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            catalog = payload if isinstance(payload, dict) else {}
        except (OSError, yaml.YAMLError):
            log.warning("Failed to load catalog for lang=%s", lang, exc_info=True)

    _catalog_cache[cache_key] = (fingerprint, catalog)
    return catalog


def _lookup_key(catalog: Mapping[str, Any], key: str) -> Any:
    node: Any = catalog
    for segment in (s.strip() for s in key.split(".")):
        if not segment:
            continue
        if isinstance(node, Mapping) and segment in node:
            node = node[segment]
            continue
        return None
    return node


def translate(lang: Optional[str], key: str) -> str:
    """
    Localized string for a dotted ``key``.

    Falls back to the default language, then to the key itself.
    """
    if not isinstance(key, str) or not key:
        return ""
    candidates = [normalize_language(lang), default_language()]
    for candidate in dict.fromkeys(c for c in candidates if c):
        resolved = _lookup_key(load_catalog(candidate), key)
        if isinstance(resolved, (str, int, float)) and not isinstance(resolved, bool):
            return str(resolved)
    return key
