# kamayakoi/settings/base.py
from __future__ import annotations
import os
from pathlib import Path

# Optional in dev, inert when no .env is present
try:
    from dotenv import load_dotenv, find_dotenv  # type: ignore

    _dotenv_path = find_dotenv(filename=os.getenv("DOTENV_FILE", ".env"), usecwd=True)
    if _dotenv_path:
        load_dotenv(_dotenv_path, override=False)
except Exception:
    pass

BASE_DIR = Path(__file__).resolve().parents[2]

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return bool(default)
    return str(value).strip().lower() in _TRUE_VALUES


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return int(default)


def _list_env(name: str, default: str = "") -> list[str]:
    raw = os.getenv(name, default) or ""
    return [item.strip() for item in raw.split(",") if item.strip()]


# --------------------------------------------------------------------------------------
# Keys & debug
# --------------------------------------------------------------------------------------
SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME_DEV_ONLY")
DEBUG = False  # dev.py flips this

ALLOWED_HOSTS: list[str] = ["kamayakoi.com", "www.kamayakoi.com"]
CSRF_TRUSTED_ORIGINS = ["https://kamayakoi.com", "https://www.kamayakoi.com"]

# --------------------------------------------------------------------------------------
# Apps
# --------------------------------------------------------------------------------------
DJANGO_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
]

THIRD_PARTY_APPS = [
    "rest_framework",
    "corsheaders",
    "meta",
]

LOCAL_APPS = [
    "apps.cms.apps.CmsConfig",
    "apps.api.apps.ApiConfig",
    "apps.pages.apps.PagesConfig",
    "apps.theme.apps.ThemeConfig",
    "apps.i18n.apps.I18nConfig",
    "apps.widgets.apps.WidgetsConfig",
    "apps.messaging.apps.MessagingConfig",
]

INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

# --------------------------------------------------------------------------------------
# Middleware
# WhiteNoise must sit right after SecurityMiddleware
# --------------------------------------------------------------------------------------
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "kamayakoi.urls"

# --------------------------------------------------------------------------------------
# Templates
# --------------------------------------------------------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "apps.i18n.context_processors.language_direction",
            ],
        },
    },
]

WSGI_APPLICATION = "kamayakoi.wsgi.application"

# The site keeps no state of its own; sqlite only backs Django internals.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# --------------------------------------------------------------------------------------
# I18N / TZ
# --------------------------------------------------------------------------------------
LANGUAGE_CODE = "en"
TIME_ZONE = "Africa/Abidjan"
USE_I18N = True
USE_TZ = True

LANGUAGES = [
    ("en", "English"),
    ("fr", "French"),
]

DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en")
LANGUAGE_COOKIE_NAME = "lang"
LANGUAGE_COOKIE_MAX_AGE = 60 * 60 * 24 * 365
I18N_CATALOG_DIR = BASE_DIR / "configs" / "i18n"

# --------------------------------------------------------------------------------------
# Static
# --------------------------------------------------------------------------------------
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STATICFILES_DIRS = [BASE_DIR / "static"]

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"
    },
}

# --------------------------------------------------------------------------------------
# Security (safe defaults; dev.py relaxes)
# --------------------------------------------------------------------------------------
CSRF_COOKIE_SECURE = True
SECURE_SSL_REDIRECT = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_REFERRER_POLICY = "same-origin"
X_FRAME_OPTIONS = "DENY"

if os.getenv("USE_X_FORWARDED_PROTO", "1") in ("1", "true", "True"):
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# --------------------------------------------------------------------------------------
# Content store (Sanity)
# --------------------------------------------------------------------------------------
SANITY_PROJECT_ID = os.getenv("SANITY_PROJECT_ID", "qziej56d")
SANITY_DATASET = os.getenv("SANITY_DATASET", "production")
SANITY_API_VERSION = os.getenv("SANITY_API_VERSION", "2024-01-01")
SANITY_USE_CDN = env_flag("SANITY_USE_CDN", default=False)  # direct API for consistency
SANITY_API_TOKEN = os.getenv("SANITY_API_TOKEN", "")
SANITY_TIMEOUT = _int_env("SANITY_TIMEOUT", 10)

# Default lifetime of cached content and rendered pages (seconds)
CMS_CACHE_TIMEOUT = _int_env("CMS_CACHE_TIMEOUT", 3600)

# Shared secret for /api/revalidate; empty keeps the endpoint open
REVALIDATE_SECRET = os.getenv("REVALIDATE_SECRET", "")

# Remote hosts the image layer is allowed to serve from
REMOTE_IMAGE_PATTERNS = [
    {"protocol": "https", "hostname": "res.cloudinary.com", "pathname": "/**"},
    {"protocol": "https", "hostname": "cdn.sanity.io", "pathname": "/images/**"},
    {"protocol": "https", "hostname": "img.youtube.com", "pathname": "/vi/**"},
    {"protocol": "https", "hostname": "i1.sndcdn.com", "pathname": "/artworks-**"},
]
REMOTE_IMAGE_PLACEHOLDER = "img/placeholder.svg"
REMOTE_IMAGE_TIMEOUT = _int_env("REMOTE_IMAGE_TIMEOUT", 10)
REMOTE_IMAGE_MAX_AGE = _int_env("REMOTE_IMAGE_MAX_AGE", 60 * 60 * 24)

# --------------------------------------------------------------------------------------
# Email relay (Resend)
# --------------------------------------------------------------------------------------
RESEND_API_URL = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")
RESEND_API_KEY = os.getenv("RESEND_API_KEY", "")
RESEND_TIMEOUT = _int_env("RESEND_TIMEOUT", 10)
NEWSLETTER_FROM_EMAIL = os.getenv("NEWSLETTER_FROM_EMAIL", "Kamayakoi <newsletter@kamayakoi.com>")
NEWSLETTER_TO_EMAIL = os.getenv("NEWSLETTER_TO_EMAIL", "contact@kamayakoi.com")

# --------------------------------------------------------------------------------------
# Logging
# --------------------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "[{levelname}] {name}: {message}", "style": "{"},
        "verbose": {"format": "{asctime} [{levelname}] {name} {module}:{lineno} {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "verbose"},
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django.request": {"handlers": ["console"], "level": "WARNING", "propagate": True},
    },
}

LOGGING["loggers"].update({
    "cms.client": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "cms.cache": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "cms.queries": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "cms.images": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "api.revalidate": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "api.gallery": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "pages.compose": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "pages.render": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "messaging.relay": {"handlers": ["console"], "level": "INFO", "propagate": False},
    "i18n.catalog": {"handlers": ["console"], "level": "WARNING", "propagate": False},
})

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# --------------------------------------------------------------------------------------
# Cache (Redis in production; dev/test use local memory)
# --------------------------------------------------------------------------------------
REDIS_URL = os.getenv("REDIS_URL", "redis://127.0.0.1:6379/3")

CACHES = {
    "default": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": REDIS_URL,
        "OPTIONS": {
            "CLIENT_CLASS": "django_redis.client.DefaultClient",
            "COMPRESSOR": "django_redis.compressors.zlib.ZlibCompressor",
            "IGNORE_EXCEPTIONS": True,  # no 500 when Redis is down
        },
        "KEY_PREFIX": "kamayakoi",
        "TIMEOUT": CMS_CACHE_TIMEOUT,
    }
}

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],  # public endpoints
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser", "rest_framework.parsers.FormParser"],
    "UNAUTHENTICATED_USER": None,
}

# --------------------------------------------------------------------------------------
# SEO (django-meta)
# --------------------------------------------------------------------------------------
SEO_DEFAULTS = {
    "site_name": "Kamayakoi",
    "title": "Kamayakoi",
    "description": "Rendez-vous sauvage pour électrons libres.",
    "base_url": os.getenv("SEO_BASE_URL", "http://localhost:8000"),
    "default_image": "/static/img/og-default.svg",
}

META_USE_SITES = False
META_SITE_DOMAIN = os.getenv("META_SITE_DOMAIN", "kamayakoi.com")
META_SITE_PROTOCOL = "https"
META_SITE_NAME = SEO_DEFAULTS["site_name"]
META_USE_OG_PROPERTIES = True
META_USE_TWITTER_PROPERTIES = True
META_USE_TITLE_TAG = True

# MIME types for modern images served through the proxy
import mimetypes

mimetypes.add_type("image/avif", ".avif", strict=False)
mimetypes.add_type("image/webp", ".webp", strict=False)
