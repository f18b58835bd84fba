from __future__ import annotations

from django import template

from apps.i18n.catalog import default_language, translate

register = template.Library()


@register.simple_tag(takes_context=True)
def t(context, key: str) -> str:
    """{% t "eventsPage.metadata.title" %} in the page's language."""
    page = context.get("page")
    lang = getattr(getattr(page, "i18n", None), "current_language", None) or context.get("lang_code") or default_language()
    return translate(lang, key)
