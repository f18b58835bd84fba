"""Typed fetchers over the content store, one per content shape.

Every fetcher "fails soft": a content store error is logged once and turned
into ``[]`` (lists) or ``None`` (details). Callers turn ``None`` into a
not-found response. ``fetch_archive_images`` is the one strict fetcher.
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Iterable, Optional, TypeVar

from .client import get_client
from .exceptions import ContentError
from .viewmodels import (
    ArchiveImageRecord,
    ArtistData,
    BlogPost,
    BlogPostSummary,
    EventDetail,
    EventSummary,
    HomepageContent,
    MusicTrack,
    Product,
    PromoEvent,
)

log = logging.getLogger("cms.queries")

T = TypeVar("T")

ONE_HOUR = 3600
TWO_HOURS = 7200

DEFAULT_LOCALE = "en"

_EVENT_CARD = """
    _id,
    title,
    "slug": slug.current,
    date,
    "time": coalesce(time, "TBD"),
    location,
    "flyerUrl": flyer.asset->url,
    "promoVideoUrl": promoVideo.asset->url,
    number,
    description,
    ticketsAvailable
"""

_POST_CARD = """
    _id,
    title,
    "slug": slug.current,
    publishedAt,
    excerpt,
    "mainImageUrl": mainImage.asset->url
"""

_ARTIST_CARD = """
    _id,
    name,
    "slug": slug.current,
    bio,
    "imageUrl": image.asset->url,
    socialLink,
    socialHandle,
    isResident,
    role
"""

_PRODUCT_CARD = """
    _id,
    name,
    "slug": slug.current,
    productId,
    "mainImage": images[0].asset->url,
    price,
    stock
"""


def _fetch(query: str, params: Optional[dict[str, Any]] = None, *, tags: Iterable[str] = (), revalidate: int | None = None) -> Any:
    return get_client().fetch(query, params or {}, tags=tags, revalidate=revalidate)


def fails_soft(default: Callable[[], T]) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Turn a content store error into ``default()`` with a single log line."""

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except ContentError:
                log.exception("content_fetch_failed", extra={"fetcher": func.__name__})
                return default()

        return wrapper

    return decorator


def _as_list(result: Any) -> list[dict[str, Any]]:
    if not isinstance(result, list):
        return []
    return [item for item in result if isinstance(item, dict)]


# ================================= Homepage ================================

@fails_soft(lambda: None)
def get_homepage_content() -> Optional[HomepageContent]:
    query = """*[_type == "homepage"][0] {
      primaryButtonColor,
      ticketsButtonLocation,
      showBlogInNavigation,
      showArchivesInNavigation,
      "heroContent": heroContent[]{
        title,
        description,
        type,
        isActive,
        "imageUrl": image.asset->url,
        "videoFileUrl": video.asset->url,
        videoUrl
      },
      "featuredEvents": featuredEvents[]->{ %(event)s },
      "showcaseEvents": showcaseEvents[]->{ %(event)s },
      "featuredArticles": featuredArticles[]->{ %(post)s },
      "promoEvent": promoEvent->{
        "slug": slug.current,
        "flyerUrl": flyer.asset->url,
        title
      }
    }""" % {"event": _EVENT_CARD, "post": _POST_CARD}
    result = _fetch(query, tags=["homepage"], revalidate=ONE_HOUR)
    if not isinstance(result, dict):
        return None
    return HomepageContent.from_record(result)


@fails_soft(list)
def get_homepage_music_tracks() -> list[MusicTrack]:
    query = """*[_type == "homepage"][0] {
      "musicTracks": musicTracks[]{
        title,
        artist,
        "audioUrl": audioFile.asset->url,
        "coverImageUrl": coverImage.asset->url
      }
    }"""
    result = _fetch(query, tags=["homepage", "music"], revalidate=TWO_HOURS)
    if not isinstance(result, dict):
        return []
    tracks = [MusicTrack.from_record(raw) for raw in _as_list(result.get("musicTracks"))]
    return [track for track in tracks if track.audio_url]


@fails_soft(lambda: None)
def get_homepage_promo_event() -> Optional[PromoEvent]:
    query = """*[_type == "homepage"][0] {
      promoEvent->{
        "slug": slug.current,
        "flyerUrl": flyer.asset->url,
        title
      }
    }"""
    result = _fetch(query, tags=["homepage", "events"], revalidate=ONE_HOUR)
    if not isinstance(result, dict):
        return None
    return PromoEvent.from_record(result.get("promoEvent"))


# ================================= Events ================================

@fails_soft(list)
def get_latest_events(limit: int = 3) -> list[EventSummary]:
    """Upcoming events, soonest first."""
    query = """*[_type == "event" && dateTime(date) >= dateTime(now())] | order(date asc) [0...$limit] { %s }""" % _EVENT_CARD
    result = _fetch(query, {"limit": limit}, tags=["events"], revalidate=ONE_HOUR)
    return [EventSummary.from_record(raw) for raw in _as_list(result)]


@fails_soft(list)
def get_all_events() -> list[EventSummary]:
    query = """*[_type == "event"] | order(date desc) { %s }""" % _EVENT_CARD
    result = _fetch(query, tags=["events"], revalidate=ONE_HOUR)
    return [EventSummary.from_record(raw) for raw in _as_list(result)]


@fails_soft(list)
def get_events_for_parallax(limit: int = 5) -> list[EventSummary]:
    """Newest events first, ordered by edition number then date."""
    query = """*[_type == "event"] | order(number desc, date desc) [0...$limit] { %s }""" % _EVENT_CARD
    result = _fetch(query, {"limit": limit}, tags=["events"], revalidate=ONE_HOUR)
    return [EventSummary.from_record(raw) for raw in _as_list(result)]


@fails_soft(lambda: None)
def get_event_by_slug(slug: str, locale: str = DEFAULT_LOCALE) -> Optional[EventDetail]:
    query = """*[_type == "event" && slug.current == $slug][0] {
      _id,
      title,
      subtitle,
      "slug": slug.current,
      date,
      "time": coalesce(time, "TBD"),
      location,
      "flyerUrl": flyer.asset->url,
      "description": coalesce(description[$locale], description.en, description),
      "venueDetails": coalesce(venueDetails[$locale], venueDetails.en, venueDetails),
      hostedBy,
      ticketsAvailable,
      paymentLink,
      ticketTypes[]{
        _key, name, price, description, details, stock, maxPerOrder,
        paymentLink, salesStart, salesEnd, active, productId
      },
      "lineup": lineup[]->{ %(artist)s },
      gallery[]{
        _key,
        "url": asset->url,
        caption
      },
      bundles[]{
        _key, name, bundleId, price, description, details, stock, active,
        paymentLink, salesStart, salesEnd, maxPerOrder, productId, ticketsIncluded
      }
    }""" % {"artist": _ARTIST_CARD}
    result = _fetch(
        query,
        {"slug": slug, "locale": locale or DEFAULT_LOCALE},
        tags=[f"event-{slug}", "events"],
        revalidate=ONE_HOUR,
    )
    if not isinstance(result, dict):
        return None
    return EventDetail.from_record(result)


# ================================= Blog ================================

@fails_soft(list)
def get_latest_blog_posts(limit: int = 2) -> list[BlogPostSummary]:
    query = """*[_type == "post"] | order(publishedAt desc) [0...$limit] { %s }""" % _POST_CARD
    result = _fetch(query, {"limit": limit}, tags=["posts"], revalidate=ONE_HOUR)
    return [BlogPostSummary.from_record(raw) for raw in _as_list(result)]


@fails_soft(list)
def get_all_blog_posts() -> list[BlogPostSummary]:
    query = """*[_type == "post"] | order(publishedAt desc) { %s }""" % _POST_CARD
    result = _fetch(query, tags=["posts"], revalidate=ONE_HOUR)
    return [BlogPostSummary.from_record(raw) for raw in _as_list(result)]


@fails_soft(lambda: None)
def get_blog_post_by_slug(slug: str) -> Optional[BlogPost]:
    query = """*[_type == "post" && slug.current == $slug][0] {
      %s,
      "author": author->{name, "image": image.asset->url},
      body,
      "categories": categories[]->{title}
    }""" % _POST_CARD
    result = _fetch(query, {"slug": slug}, tags=[f"post-{slug}", "posts"], revalidate=ONE_HOUR)
    if not isinstance(result, dict):
        return None
    return BlogPost.from_record(result)


# ================================= Artists ================================

@fails_soft(list)
def get_all_artists() -> list[ArtistData]:
    query = """*[_type == "artist"] | order(isResident desc, name asc) { %s }""" % _ARTIST_CARD
    result = _fetch(query, tags=["artists"], revalidate=ONE_HOUR)
    return [ArtistData.from_record(raw) for raw in _as_list(result)]


@fails_soft(lambda: None)
def get_artist_by_slug(slug: str) -> Optional[ArtistData]:
    query = """*[_type == "artist" && slug.current == $slug][0] { %s }""" % _ARTIST_CARD
    result = _fetch(query, {"slug": slug}, tags=[f"artist-{slug}", "artists"], revalidate=ONE_HOUR)
    if not isinstance(result, dict):
        return None
    return ArtistData.from_record(result)


# ================================= Products ================================

@fails_soft(list)
def get_all_products() -> list[Product]:
    query = """*[_type == "product"] | order(name asc) { %s }""" % _PRODUCT_CARD
    result = _fetch(query, tags=["products"], revalidate=ONE_HOUR)
    return [Product.from_record(raw) for raw in _as_list(result)]


@fails_soft(lambda: None)
def get_product_by_slug(slug: str) -> Optional[Product]:
    query = """*[_type == "product" && slug.current == $slug][0] {
      %s,
      description,
      "imageUrls": images[].asset->url,
      "categories": categories[]->{title}
    }""" % _PRODUCT_CARD
    result = _fetch(query, {"slug": slug}, tags=[f"product-{slug}", "products"], revalidate=ONE_HOUR)
    if not isinstance(result, dict):
        return None
    return Product.from_record(result)


# ================================= Archives ================================

def fetch_archive_images() -> list[ArchiveImageRecord]:
    """Archive images, newest first. Always fresh; raises ContentError."""
    query = """*[_type == "archiveImage"] | order(_createdAt desc) {
      "imageUrl": image.asset->url,
      "width": image.asset->metadata.dimensions.width,
      "height": image.asset->metadata.dimensions.height,
      category
    }"""
    result = _fetch(query)
    return [ArchiveImageRecord.from_record(raw) for raw in _as_list(result)]
