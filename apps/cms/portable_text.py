"""Minimal HTML renderer for Sanity portable text bodies."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from django.utils.html import escape, format_html
from django.utils.safestring import SafeString, mark_safe

from .images import is_allowed_remote_image

_BLOCK_TAGS = {
    "normal": "p",
    "h1": "h2",  # the page title owns h1
    "h2": "h2",
    "h3": "h3",
    "h4": "h4",
    "blockquote": "blockquote",
}
_MARK_TAGS = {
    "strong": "strong",
    "em": "em",
    "underline": "u",
    "code": "code",
    "strike-through": "s",
}
_LIST_TAGS = {"bullet": "ul", "number": "ol"}


def _render_span(span: Mapping[str, Any], mark_defs: Mapping[str, Mapping[str, Any]]) -> str:
    html = escape(span.get("text") or "").replace("\n", "<br>")
    for mark in span.get("marks") or []:
        if mark in _MARK_TAGS:
            tag = _MARK_TAGS[mark]
            html = f"<{tag}>{html}</{tag}>"
            continue
        definition = mark_defs.get(mark)
        if definition and definition.get("_type") == "link" and definition.get("href"):
            href = str(definition["href"])
            if href.startswith(("http://", "https://", "mailto:", "/")):
                html = f'<a href="{escape(href)}" rel="noopener" target="_blank">{html}</a>'
    return html


def _render_block(block: Mapping[str, Any]) -> str:
    mark_defs = {d.get("_key"): d for d in block.get("markDefs") or [] if isinstance(d, Mapping)}
    inner = "".join(
        _render_span(child, mark_defs)
        for child in block.get("children") or []
        if isinstance(child, Mapping) and child.get("_type", "span") == "span"
    )
    if block.get("listItem"):
        return f"<li>{inner}</li>"
    tag = _BLOCK_TAGS.get(block.get("style") or "normal", "p")
    return f"<{tag}>{inner}</{tag}>"


def _render_image(block: Mapping[str, Any]) -> str:
    asset = block.get("asset") or {}
    url = block.get("url") or (asset.get("url") if isinstance(asset, Mapping) else None)
    if not is_allowed_remote_image(url):
        return ""
    return format_html('<figure><img src="{}" alt="{}" loading="lazy"></figure>', url, block.get("alt") or "")


def render_portable_text(blocks: Iterable[Mapping[str, Any]] | None) -> SafeString:
    """Render blocks to HTML; unknown block types are skipped."""
    out: list[str] = []
    open_list: str | None = None
    for block in blocks or ():
        if not isinstance(block, Mapping):
            continue
        list_tag = _LIST_TAGS.get(block.get("listItem") or "") if block.get("_type") == "block" else None
        if open_list and list_tag != open_list:
            out.append(f"</{open_list}>")
            open_list = None
        if list_tag and not open_list:
            out.append(f"<{list_tag}>")
            open_list = list_tag

        kind = block.get("_type")
        if kind == "block":
            out.append(_render_block(block))
        elif kind == "image":
            out.append(_render_image(block))
    if open_list:
        out.append(f"</{open_list}>")
    return mark_safe("".join(out))
