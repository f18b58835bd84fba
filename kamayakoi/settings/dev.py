# kamayakoi/settings/dev.py
# export DJANGO_SETTINGS_MODULE=kamayakoi.settings.dev

from .base import *

DEBUG = True

ALLOWED_HOSTS = [
    "127.0.0.1",
    "localhost",
    "testserver",
    ".ngrok.io", ".ngrok-free.app",
]
CSRF_TRUSTED_ORIGINS = [
    "http://127.0.0.1:8000", "http://localhost:8000",
    "https://*.ngrok.io", "https://*.ngrok-free.app",
]

CORS_ALLOWED_ORIGINS = [
    "http://localhost:8000",
    "http://127.0.0.1:8000",
    "http://127.0.0.1:3333",  # Sanity Studio
]

# Dev: no forced SSL redirect
SECURE_SSL_REDIRECT = False
CSRF_COOKIE_SECURE = False
SECURE_HSTS_SECONDS = 0

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "kamayakoi-dev",
        "TIMEOUT": CMS_CACHE_TIMEOUT,
    }
}

META_SITE_PROTOCOL = "http"
META_SITE_DOMAIN = "localhost:8000"

WHITENOISE_AUTOREFRESH = True
WHITENOISE_USE_FINDERS = True

STORAGES["staticfiles"] = {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"}

LOGGING["loggers"].update({
    "cms.client": {"handlers": ["console"], "level": "DEBUG", "propagate": False},
})
