__all__ = ["TranslationContext", "resolve_language", "translate"]


def __getattr__(name):
    # Lazy so the app registry is not touched at import time.
    if name == "translate":
        from .catalog import translate

        return translate
    if name in ("TranslationContext", "resolve_language"):
        from . import context

        return getattr(context, name)
    raise AttributeError(f"module 'apps.i18n' has no attribute '{name}'")
