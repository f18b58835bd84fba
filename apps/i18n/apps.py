from django.apps import AppConfig


class I18nConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.i18n"
    label = "site_i18n"
    verbose_name = "Translations"
