from __future__ import annotations

import logging

from django.http import Http404, HttpResponseRedirect
from django.views import View
from django.views.generic import RedirectView

from apps.cms.queries import get_event_by_slug, get_events_for_parallax
from apps.i18n.context import resolve_language
from apps.widgets.swipe import build_swipe_navigation

from ..mixins import ContentPageView

log = logging.getLogger("pages.events")

OTHER_EVENTS_LIMIT = 4
PARALLAX_LIMIT = 10


class EventsIndexView(RedirectView):
    """/events/ has no listing of its own: it jumps to the latest event."""

    permanent = False

    def get_redirect_url(self, *args, **kwargs):
        latest = get_events_for_parallax(limit=1)
        if not latest:
            return "/"
        return latest[0].url


class EventDetailView(ContentPageView):
    template_name = "pages/event_detail.html"
    meta_type = "event"

    def get_cache_tags(self):
        return [f"event-{self.kwargs['slug']}", "events"]

    def get_fetches(self):
        slug = self.kwargs["slug"]
        lang = resolve_language(self.request)
        return {
            "event": lambda: get_event_by_slug(slug, lang),
            "parallax": lambda: get_events_for_parallax(limit=PARALLAX_LIMIT),
        }

    def get_content(self, results):
        event = results["event"]
        if event is None:
            raise Http404("Event not found")
        self.event = event
        slug = self.kwargs["slug"]
        parallax = results["parallax"]
        return {
            "event": event,
            "swipe": build_swipe_navigation(parallax, slug),
            "other_events": [item for item in parallax if item.slug != slug][:OTHER_EVENTS_LIMIT],
        }

    def get_meta_title(self, page):
        return self.event.title

    def get_meta_description(self, page):
        return self.event.subtitle or self.event.description or ""

    def get_meta_image(self):
        return self.event.flyer_url


def _is_external_link(url: str) -> bool:
    return url.startswith(("https://", "http://"))


class TicketCheckoutView(View):
    """
    /events/<slug>/tickets/<key>/: hand the buyer over to the CMS payment link.

    Anything that is not currently purchasable sends the visitor back to the event page.
    """

    http_method_names = ["get"]

    def get(self, request, slug: str, key: str, *args, **kwargs):
        event = get_event_by_slug(slug, resolve_language(request))
        if event is None:
            raise Http404("Event not found")

        item = event.find_ticket_item(key)
        if item is None or not event.tickets_available or not item.is_on_sale():
            log.info("ticket_not_on_sale", extra={"event": slug, "item": key})
            return HttpResponseRedirect(event.url)

        link = item.payment_link or ""
        if not _is_external_link(link):
            log.warning("ticket_payment_link_missing", extra={"event": slug, "item": key})
            return HttpResponseRedirect(event.url)
        return HttpResponseRedirect(link)
