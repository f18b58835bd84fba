from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional

from django.conf import settings
from django.http import HttpResponse
from django.utils.html import strip_tags
from django.views.generic import TemplateView
from meta.views import Meta

from apps.cms import cache
from apps.cms.queries import get_homepage_content
from apps.i18n.context import resolve_language
from apps.theme.context import normalize_mode, theme_cookie_name

from .compose import gather
from .context import PageContext

log = logging.getLogger("pages.render")

RENDER_CACHE_HEADER = "X-Render-Cache"


class SeoViewMixin:
    """
    Page metadata through django-meta.

    - meta_title_key / meta_description_key are catalog keys, resolved in the page language
    - get_meta_title / get_meta_description may be overridden with content-driven values
    - anything missing falls back to SEO_DEFAULTS
    """

    meta_title_key: Optional[str] = None
    meta_description_key: Optional[str] = None
    meta_type = "website"

    def _seo_defaults(self) -> dict:
        return getattr(settings, "SEO_DEFAULTS", {}) or {}

    def get_meta_title(self, page: PageContext) -> str:
        return page.t(self.meta_title_key) if self.meta_title_key else ""

    def get_meta_description(self, page: PageContext) -> str:
        return page.t(self.meta_description_key) if self.meta_description_key else ""

    def get_meta_image(self) -> Optional[str]:
        return None

    def build_meta(self, page: PageContext) -> Meta:
        cfg = self._seo_defaults()
        site_name = cfg.get("site_name") or "Kamayakoi"
        title = (self.get_meta_title(page) or cfg.get("title") or site_name).strip()
        if title != site_name:
            title = f"{title} | {site_name}"
        description = strip_tags(self.get_meta_description(page) or cfg.get("description") or "")
        image = self.get_meta_image() or cfg.get("default_image") or None
        return Meta(
            title=title,
            use_title_tag=True,
            description=description,
            image=image,
            url=self.request.build_absolute_uri(self.request.path),
            object_type=self.meta_type,
            site_name=site_name,
            locale=page.lang,
            twitter_card="summary_large_image",
        )


class RenderCacheMixin:
    """
    Caches rendered GET pages in the tagged render cache.

    Entries are keyed by path, query string, language and theme mode, and
    tagged with the view's content tags plus the ``path:`` tag of the route.
    Views that render from the homepage document also carry the ``homepage``
    tag, so theme and navigation changes reach every page.
    """

    render_cache = True
    cache_tags: Iterable[str] = ()
    composes_homepage = False

    def get_cache_tags(self) -> list[str]:
        return list(self.cache_tags)

    def render_cache_key(self, request) -> str:
        return cache.build_key(
            "page",
            request.path,
            sorted(request.GET.lists()),
            resolve_language(request),
            normalize_mode(request.COOKIES.get(theme_cookie_name())),
        )

    def dispatch(self, request, *args, **kwargs):
        if not self.render_cache or request.method != "GET":
            return super().dispatch(request, *args, **kwargs)

        key = self.render_cache_key(request)
        hit, html = cache.get_entry(key)
        if hit:
            response = HttpResponse(html)
            response[RENDER_CACHE_HEADER] = "hit"
            return response

        response = super().dispatch(request, *args, **kwargs)
        if response.status_code != 200 or response.streaming:
            return response
        if hasattr(response, "render") and not response.is_rendered:
            response.render()
        tags = list(self.get_cache_tags())
        if self.composes_homepage and "homepage" not in tags:
            tags.append("homepage")
        tags.append(cache.path_tag(request.path))
        cache.set_entry(key, response.content.decode(response.charset), tags=tags)
        log.debug("page_cached", extra={"path": request.path, "tags": tags})
        response[RENDER_CACHE_HEADER] = "miss"
        return response


class ContentPageView(RenderCacheMixin, SeoViewMixin, TemplateView):
    """
    Base for CMS-backed pages.

    Subclasses declare their independent fetches in get_fetches(); they run
    concurrently together with the homepage document (theme colour and
    navigation toggles), then get_content() turns the results into template
    context. Raising Http404 from get_content() yields the 404 page.
    """

    composes_homepage = True

    def get_fetches(self) -> Dict[str, Callable[[], Any]]:
        return {}

    def get_content(self, results: Dict[str, Any]) -> Dict[str, Any]:
        return results

    def get(self, request, *args, **kwargs):
        results = gather(homepage=get_homepage_content, **self.get_fetches())
        homepage = results.pop("homepage")
        page = PageContext.build(request, homepage)
        self.homepage, self.page = homepage, page
        content = self.get_content(results)
        context = self.get_context_data(page=page, homepage=homepage, meta=self.build_meta(page), **kwargs, **content)
        return self.render_to_response(context)
