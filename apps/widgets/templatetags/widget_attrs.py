from __future__ import annotations

from django import template
from django.forms.utils import flatatt

register = template.Library()


@register.filter(name="data_attrs")
def data_attrs(widget):
    """Render a widget's ``data-*`` attributes, empty for ``None``."""
    if widget is None:
        return ""
    return flatatt(widget.data_attrs())
