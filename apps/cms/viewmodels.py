"""View models shaped from raw content store records.

Read-only projections: every ``from_record`` accepts the raw mapping returned
by a GROQ projection (possibly partial) and never mutates it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Any, Mapping, Optional, Self

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def _str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _opt_str(value: Any) -> Optional[str]:
    text = _str(value)
    return text or None


def _opt_int(value: Any) -> Optional[int]:
    if value in (None, "") or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _slug(value: Any) -> str:
    # Projections return either "slug": slug.current or the raw {current: ...} object.
    if isinstance(value, Mapping):
        return _str(value.get("current"))
    return _str(value)


def _records(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def parse_when(value: Any) -> Optional[datetime]:
    """Parse a CMS date or datetime string into an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = _str(value)
        if not text:
            return None
        try:
            parsed = parse_datetime(text)
            if parsed is None:
                day = parse_date(text)
                parsed = datetime.combine(day, time.min) if day else None
        except ValueError:
            return None
    if parsed is None:
        return None
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, timezone.get_default_timezone())
    return parsed


@dataclass(frozen=True)
class Venue:
    venue_name: Optional[str] = None
    address: Optional[str] = None
    google_maps_url: Optional[str] = None
    yango_url: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Any) -> Optional[Self]:
        if isinstance(raw, str):
            return cls(venue_name=_opt_str(raw))
        if not isinstance(raw, Mapping):
            return None
        return cls(
            venue_name=_opt_str(raw.get("venueName")),
            address=_opt_str(raw.get("address")),
            google_maps_url=_opt_str(raw.get("googleMapsUrl")),
            yango_url=_opt_str(raw.get("yangoUrl")),
        )

    @property
    def map_query(self) -> str:
        parts = []
        if self.venue_name and len(self.venue_name) > 2:
            parts.append(self.venue_name)
        if self.address and len(self.address) > 5:
            parts.append(self.address)
        return ", ".join(parts)


@dataclass(frozen=True)
class EventSummary:
    """Event as listed on home, parallax and navigation surfaces."""

    id: str
    title: str
    slug: str
    date: Optional[datetime] = None
    time: str = "TBD"
    location: Optional[Venue] = None
    flyer_url: Optional[str] = None
    tickets_available: bool = False
    description: Optional[str] = None
    promo_video_url: Optional[str] = None
    number: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        return cls(
            id=_str(raw.get("_id")),
            title=_str(raw.get("title")),
            slug=_slug(raw.get("slug")),
            date=parse_when(raw.get("date")),
            time=_str(raw.get("time")) or "TBD",
            location=Venue.from_record(raw.get("location")),
            flyer_url=_opt_str(raw.get("flyerUrl") or raw.get("featuredImage")),
            tickets_available=bool(raw.get("ticketsAvailable")),
            description=_opt_str(raw.get("description")),
            promo_video_url=_opt_str(raw.get("promoVideoUrl")),
            number=_opt_str(raw.get("number")),
        )

    @property
    def url(self) -> str:
        return f"/events/{self.slug}/"


@dataclass(frozen=True)
class TicketType:
    key: str
    name: str
    price: float = 0.0
    description: Optional[str] = None
    details: Optional[str] = None
    stock: Optional[int] = None
    max_per_order: Optional[int] = None
    payment_link: Optional[str] = None
    sales_start: Optional[datetime] = None
    sales_end: Optional[datetime] = None
    active: bool = False
    product_id: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        return cls(
            key=_str(raw.get("_key")),
            name=_str(raw.get("name")),
            price=_number(raw.get("price")),
            description=_opt_str(raw.get("description")),
            details=_opt_str(raw.get("details")),
            stock=_opt_int(raw.get("stock")),
            max_per_order=_opt_int(raw.get("maxPerOrder")),
            payment_link=_opt_str(raw.get("paymentLink")),
            sales_start=parse_when(raw.get("salesStart")),
            sales_end=parse_when(raw.get("salesEnd")),
            active=bool(raw.get("active")),
            product_id=_opt_str(raw.get("productId")),
        )

    @property
    def sold_out(self) -> bool:
        return self.stock is not None and self.stock <= 0

    def is_on_sale(self, now: Optional[datetime] = None) -> bool:
        now = now or timezone.now()
        if not self.active or self.sold_out:
            return False
        if self.sales_start and now < self.sales_start:
            return False
        if self.sales_end and now > self.sales_end:
            return False
        return True


@dataclass(frozen=True)
class Bundle(TicketType):
    bundle_id: str = ""
    tickets_included: int = 1

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        base = TicketType.from_record(raw)
        return cls(
            **base.__dict__,
            bundle_id=_slug(raw.get("bundleId")),
            tickets_included=_opt_int(raw.get("ticketsIncluded")) or 1,
        )


@dataclass(frozen=True)
class ArtistData:
    id: str
    name: str
    slug: str
    bio: Optional[str] = None
    image_url: Optional[str] = None
    social_link: Optional[str] = None
    social_handle: Optional[str] = None
    is_resident: bool = False
    role: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        return cls(
            id=_str(raw.get("_id")),
            name=_str(raw.get("name")),
            slug=_slug(raw.get("slug")),
            bio=_opt_str(raw.get("bio")),
            image_url=_opt_str(raw.get("imageUrl") or raw.get("image")),
            social_link=_opt_str(raw.get("socialLink")),
            social_handle=_opt_str(raw.get("socialHandle")),
            is_resident=bool(raw.get("isResident")),
            role=_opt_str(raw.get("role")),
        )


@dataclass(frozen=True)
class GalleryImage:
    key: str
    url: str
    caption: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        return cls(key=_str(raw.get("_key")), url=_str(raw.get("url")), caption=_opt_str(raw.get("caption")))


@dataclass(frozen=True)
class EventDetail:
    """Event page payload, already localized."""

    id: str
    title: str
    slug: str
    subtitle: Optional[str] = None
    date: Optional[datetime] = None
    time: str = "TBD"
    location: Optional[Venue] = None
    flyer_url: Optional[str] = None
    description: Optional[str] = None
    venue_details: Optional[str] = None
    hosted_by: Optional[str] = None
    tickets_available: bool = False
    payment_link: Optional[str] = None
    ticket_types: tuple[TicketType, ...] = ()
    bundles: tuple[Bundle, ...] = ()
    lineup: tuple[ArtistData, ...] = ()
    gallery: tuple[GalleryImage, ...] = ()

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        return cls(
            id=_str(raw.get("_id")),
            title=_str(raw.get("title")),
            slug=_slug(raw.get("slug")),
            subtitle=_opt_str(raw.get("subtitle")),
            date=parse_when(raw.get("date")),
            time=_str(raw.get("time")) or "TBD",
            location=Venue.from_record(raw.get("location")),
            flyer_url=_opt_str(raw.get("flyerUrl")),
            description=_opt_str(raw.get("description")),
            venue_details=_opt_str(raw.get("venueDetails")),
            hosted_by=_opt_str(raw.get("hostedBy")),
            tickets_available=bool(raw.get("ticketsAvailable")),
            payment_link=_opt_str(raw.get("paymentLink")),
            ticket_types=tuple(TicketType.from_record(r) for r in _records(raw.get("ticketTypes"))),
            bundles=tuple(Bundle.from_record(r) for r in _records(raw.get("bundles"))),
            lineup=tuple(ArtistData.from_record(r) for r in _records(raw.get("lineup"))),
            gallery=tuple(
                GalleryImage.from_record(r) for r in _records(raw.get("gallery")) if r.get("url")
            ),
        )

    def find_ticket_item(self, key: str) -> Optional[TicketType]:
        for ticket in self.ticket_types:
            if ticket.key == key:
                return ticket
        for bundle in self.bundles:
            if key in (bundle.key, bundle.bundle_id):
                return bundle
        return None


@dataclass(frozen=True)
class Author:
    name: str
    image_url: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Any) -> Optional[Self]:
        if not isinstance(raw, Mapping) or not _str(raw.get("name")):
            return None
        return cls(name=_str(raw.get("name")), image_url=_opt_str(raw.get("image")))


@dataclass(frozen=True)
class BlogPostSummary:
    id: str
    title: str
    slug: str
    published_at: Optional[datetime] = None
    excerpt: Optional[str] = None
    main_image_url: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        return cls(
            id=_str(raw.get("_id")),
            title=_str(raw.get("title")),
            slug=_slug(raw.get("slug")),
            published_at=parse_when(raw.get("publishedAt")),
            excerpt=_opt_str(raw.get("excerpt")),
            main_image_url=_opt_str(raw.get("mainImageUrl")),
        )

    @property
    def url(self) -> str:
        return f"/stories/{self.slug}/"


@dataclass(frozen=True)
class BlogPost(BlogPostSummary):
    author: Optional[Author] = None
    categories: tuple[str, ...] = ()
    body: tuple[Mapping[str, Any], ...] = ()

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        base = BlogPostSummary.from_record(raw)
        categories = tuple(
            _str(item.get("title")) for item in _records(raw.get("categories")) if _str(item.get("title"))
        )
        return cls(
            **base.__dict__,
            author=Author.from_record(raw.get("author")),
            categories=categories,
            body=tuple(_records(raw.get("body"))),
        )


@dataclass(frozen=True)
class MusicTrack:
    title: str
    audio_url: str
    artist: Optional[str] = None
    cover_image_url: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        return cls(
            title=_str(raw.get("title")),
            audio_url=_str(raw.get("audioUrl")),
            artist=_opt_str(raw.get("artist")),
            cover_image_url=_opt_str(raw.get("coverImageUrl")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "artist": self.artist,
            "audioUrl": self.audio_url,
            "coverImageUrl": self.cover_image_url,
        }


@dataclass(frozen=True)
class HeroItem:
    title: Optional[str] = None
    description: Optional[str] = None
    type: str = "image"
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    is_active: bool = True

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        active = raw.get("isActive")
        return cls(
            title=_opt_str(raw.get("title")),
            description=_opt_str(raw.get("description")),
            type=_str(raw.get("type")) or "image",
            image_url=_opt_str(raw.get("imageUrl")),
            # Uploaded file wins over an external link
            video_url=_opt_str(raw.get("videoFileUrl") or raw.get("videoUrl")),
            is_active=True if active is None else bool(active),
        )


@dataclass(frozen=True)
class PromoEvent:
    slug: str
    flyer_url: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Any) -> Optional[Self]:
        if not isinstance(raw, Mapping) or not _slug(raw.get("slug")):
            return None
        return cls(slug=_slug(raw.get("slug")), flyer_url=_opt_str(raw.get("flyerUrl")), title=_opt_str(raw.get("title")))


@dataclass(frozen=True)
class HomepageContent:
    """Singleton homepage document: hero, featured content, navigation toggles, theme colour."""

    hero_items: tuple[HeroItem, ...] = ()
    featured_events: tuple[EventSummary, ...] = ()
    showcase_events: tuple[EventSummary, ...] = ()
    featured_articles: tuple[BlogPostSummary, ...] = ()
    primary_button_color: str = "teal"
    tickets_button_location: str = "header"
    show_blog_in_navigation: bool = True
    show_archives_in_navigation: bool = True
    promo_event: Optional[PromoEvent] = None

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        def _flag(name: str) -> bool:
            value = raw.get(name)
            return True if value is None else bool(value)

        return cls(
            hero_items=tuple(HeroItem.from_record(r) for r in _records(raw.get("heroContent"))),
            featured_events=tuple(EventSummary.from_record(r) for r in _records(raw.get("featuredEvents"))),
            showcase_events=tuple(EventSummary.from_record(r) for r in _records(raw.get("showcaseEvents"))),
            featured_articles=tuple(BlogPostSummary.from_record(r) for r in _records(raw.get("featuredArticles"))),
            primary_button_color=_str(raw.get("primaryButtonColor")) or "teal",
            tickets_button_location=_str(raw.get("ticketsButtonLocation")) or "header",
            show_blog_in_navigation=_flag("showBlogInNavigation"),
            show_archives_in_navigation=_flag("showArchivesInNavigation"),
            promo_event=PromoEvent.from_record(raw.get("promoEvent")),
        )

    @property
    def hero_video_urls(self) -> list[str]:
        return [item.video_url for item in self.hero_items if item.is_active and item.type == "video" and item.video_url]


@dataclass(frozen=True)
class ArchiveImageRecord:
    """Archive image as stored; dimensions are left raw for the gallery endpoint to validate."""

    image_url: Optional[str]
    width: Any = None
    height: Any = None
    category: Optional[str] = None

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        return cls(
            image_url=_opt_str(raw.get("imageUrl")),
            width=raw.get("width"),
            height=raw.get("height"),
            category=_opt_str(raw.get("category")),
        )


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    slug: str
    product_id: Optional[str] = None
    description: Optional[str] = None
    main_image_url: Optional[str] = None
    image_urls: tuple[str, ...] = ()
    price: float = 0.0
    stock: Optional[int] = None
    categories: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Self:
        images = tuple(_str(url) for url in (raw.get("imageUrls") or []) if _str(url))
        main = _opt_str(raw.get("mainImage")) or (images[0] if images else None)
        return cls(
            id=_str(raw.get("_id")),
            name=_str(raw.get("name")),
            slug=_slug(raw.get("slug")),
            product_id=_opt_str(raw.get("productId")),
            description=_opt_str(raw.get("description")),
            main_image_url=main,
            image_urls=images,
            price=_number(raw.get("price")),
            stock=_opt_int(raw.get("stock")),
            categories=tuple(
                _str(item.get("title")) for item in _records(raw.get("categories")) if _str(item.get("title"))
            ),
        )

    @property
    def sold_out(self) -> bool:
        return self.stock is not None and self.stock <= 0
