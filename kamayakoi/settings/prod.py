# kamayakoi/settings/prod.py
from .base import *

DEBUG = False

SITE_DOMAIN = os.getenv("SITE_DOMAIN")  # e.g. "kamayakoi.com"
SITE_ALIASES = os.getenv("SITE_ALIASES", "")  # e.g. "www.kamayakoi.com"
if not SITE_DOMAIN:
    raise RuntimeError("SITE_DOMAIN is not set in production.")

ALIASES = [h.strip() for h in SITE_ALIASES.split(",") if h.strip()]
ALLOWED_HOSTS = [SITE_DOMAIN, "127.0.0.1"] + ALIASES
CSRF_TRUSTED_ORIGINS = [f"https://{SITE_DOMAIN}"] + [f"https://{h}" for h in ALIASES]

META_SITE_DOMAIN = SITE_DOMAIN

SECURE_REFERRER_POLICY = "strict-origin-when-cross-origin"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOGGING["root"]["level"] = LOG_LEVEL
LOGGING["loggers"]["django.request"]["level"] = "ERROR"

# Sanity Studio calls /api/revalidate from its webhook
CORS_ALLOWED_ORIGINS = _list_env("CORS_ALLOWED_ORIGINS", "https://kamayakoi.sanity.studio")

if not REVALIDATE_SECRET:
    import logging

    logging.getLogger("api.revalidate").warning("revalidate_endpoint_unprotected")
