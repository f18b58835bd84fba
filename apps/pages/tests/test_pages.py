from __future__ import annotations

from datetime import timedelta
from unittest.mock import patch

from bs4 import BeautifulSoup
from django.conf import settings
from django.contrib.staticfiles import finders
from django.core.cache import cache as djcache
from django.test import SimpleTestCase
from django.utils import timezone

from apps.cms import cache
from apps.cms.viewmodels import (
    BlogPost,
    BlogPostSummary,
    EventDetail,
    EventSummary,
    HeroItem,
    HomepageContent,
    Product,
    PromoEvent,
    TicketType,
)


def _summary(slug: str) -> EventSummary:
    return EventSummary(id=slug, title=f"Night {slug}", slug=slug)


def _post(slug: str) -> BlogPostSummary:
    return BlogPostSummary(id=slug, title=f"Story {slug}", slug=slug)


class PageTestCase(SimpleTestCase):
    homepage = HomepageContent(primary_button_color="rose")

    def setUp(self) -> None:
        djcache.clear()
        patcher = patch("apps.pages.mixins.get_homepage_content", return_value=self.homepage)
        self.mock_homepage = patcher.start()
        self.addCleanup(patcher.stop)


class HomePageTests(PageTestCase):
    homepage = HomepageContent(
        primary_button_color="rose",
        hero_items=(
            HeroItem(type="video", video_url="https://cdn.example.com/a.mp4"),
            HeroItem(type="video", video_url="https://cdn.example.com/b.mp4", is_active=False),
        ),
        show_blog_in_navigation=False,
        promo_event=PromoEvent(slug="next-night"),
    )

    @patch("apps.pages.views.home.get_latest_blog_posts", return_value=[])
    @patch("apps.pages.views.home.get_latest_events", return_value=[_summary("e1")])
    def test_home_composes_content_and_page_context(self, mock_events, mock_posts) -> None:
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Night e1")
        self.assertEqual(response.context["hero_video_urls"], ["https://cdn.example.com/a.mp4"])

        page = response.context["page"]
        self.assertEqual(page.theme.primary_button_color, "rose")
        self.assertEqual(page.navigation.tickets_url, "/events/next-night/")
        self.assertNotContains(response, 'href="/stories/"')
        self.assertContains(response, "bg-rose-600")

    @patch("apps.pages.views.home.get_latest_blog_posts", return_value=[])
    @patch("apps.pages.views.home.get_latest_events", return_value=[])
    def test_theme_cookie_and_language(self, mock_events, mock_posts) -> None:
        self.client.cookies["theme"] = "dark"
        response = self.client.get("/?lang=fr")
        self.assertContains(response, 'class="dark"')
        self.assertContains(response, 'lang="fr"')
        self.assertContains(response, "Boutique")


class RenderCacheTests(PageTestCase):
    @patch("apps.pages.views.home.get_latest_blog_posts", return_value=[])
    @patch("apps.pages.views.home.get_latest_events", return_value=[_summary("e1")])
    def test_pages_are_cached_until_revalidated(self, mock_events, mock_posts) -> None:
        first = self.client.get("/")
        self.assertEqual(first["X-Render-Cache"], "miss")
        second = self.client.get("/")
        self.assertEqual(second["X-Render-Cache"], "hit")
        self.assertEqual(second.content, first.content)
        self.assertEqual(mock_events.call_count, 1)

        cache.revalidate_tag("events")
        self.assertEqual(self.client.get("/")["X-Render-Cache"], "miss")
        self.assertEqual(mock_events.call_count, 2)

        cache.revalidate_path("/")
        self.assertEqual(self.client.get("/")["X-Render-Cache"], "miss")

    @patch("apps.pages.views.home.get_latest_blog_posts", return_value=[])
    @patch("apps.pages.views.home.get_latest_events", return_value=[])
    def test_language_and_theme_have_separate_entries(self, mock_events, mock_posts) -> None:
        self.client.get("/")
        self.assertEqual(self.client.get("/?lang=fr")["X-Render-Cache"], "miss")
        self.client.cookies["theme"] = "dark"
        self.assertEqual(self.client.get("/")["X-Render-Cache"], "miss")

    @patch("apps.pages.views.artists.get_all_artists", return_value=[])
    def test_unrelated_tag_keeps_entry(self, mock_artists) -> None:
        self.client.get("/artists/")
        cache.revalidate_tag("posts")
        self.assertEqual(self.client.get("/artists/")["X-Render-Cache"], "hit")

    @patch("apps.pages.views.artists.get_all_artists", return_value=[])
    def test_homepage_revalidation_refreshes_theme_on_content_pages(self, mock_artists) -> None:
        self.assertContains(self.client.get("/artists/"), "bg-rose-600")

        self.mock_homepage.return_value = HomepageContent(primary_button_color="blue")
        cache.revalidate_tag("homepage")

        response = self.client.get("/artists/")
        self.assertEqual(response["X-Render-Cache"], "miss")
        self.assertContains(response, "bg-blue-600")
        self.assertContains(response, 'data-accent="#2563eb"')
        self.assertNotContains(response, "bg-rose-600")


class EventPagesTests(PageTestCase):
    def _detail(self, **overrides) -> EventDetail:
        values = dict(id="e2", title="Night Two", slug="e2", tickets_available=True, description="Bring water.")
        values.update(overrides)
        return EventDetail(**values)

    @patch("apps.pages.views.events.get_events_for_parallax", return_value=[_summary("latest")])
    def test_index_redirects_to_latest(self, mock_parallax) -> None:
        response = self.client.get("/events/")
        self.assertRedirects(response, "/events/latest/", fetch_redirect_response=False)
        mock_parallax.assert_called_once_with(limit=1)

    @patch("apps.pages.views.events.get_events_for_parallax", return_value=[])
    def test_index_without_events_goes_home(self, mock_parallax) -> None:
        self.assertRedirects(self.client.get("/events/"), "/", fetch_redirect_response=False)

    @patch("apps.pages.views.events.get_events_for_parallax")
    @patch("apps.pages.views.events.get_event_by_slug")
    def test_detail_with_swipe_and_other_events(self, mock_event, mock_parallax) -> None:
        mock_event.return_value = self._detail()
        mock_parallax.return_value = [_summary(s) for s in ("e6", "e5", "e4", "e3", "e2", "e1")]

        response = self.client.get("/events/e2/?lang=fr")
        self.assertEqual(response.status_code, 200)
        mock_event.assert_called_once_with("e2", "fr")
        mock_parallax.assert_called_once_with(limit=10)

        swipe = response.context["swipe"]
        self.assertEqual(swipe.previous_url, "/events/e1/")
        self.assertEqual(swipe.next_url, "/events/e3/")
        self.assertEqual([e.slug for e in response.context["other_events"]], ["e6", "e5", "e4", "e3"])
        self.assertIn("Night Two", response.context["meta"].title)
        self.assertContains(response, 'data-swipe-min="50"')

    @patch("apps.pages.views.events.get_events_for_parallax", return_value=[])
    @patch("apps.pages.views.events.get_event_by_slug")
    def test_ticket_list_states(self, mock_event, mock_parallax) -> None:
        mock_event.return_value = self._detail(
            ticket_types=(
                TicketType(key="ga", name="General", price=5000, active=True, payment_link="https://p.example.com/ga"),
                TicketType(key="vip", name="VIP", price=15000, active=True, stock=0),
                TicketType(key="late", name="Late", active=False),
            )
        )
        soup = BeautifulSoup(self.client.get("/events/e2/").content.decode(), "html.parser")

        items = {item.h4.get_text(strip=True): item for item in soup.select(".tickets .ticket-item")}
        self.assertEqual(set(items), {"General", "VIP", "Late"})
        buy = items["General"].find("a")
        self.assertEqual(buy["href"], "/events/e2/tickets/ga/")
        self.assertIn("bg-rose-600", buy["class"])
        self.assertIn("5000 F CFA", items["General"].select_one(".price").get_text(" ", strip=True))
        self.assertIsNotNone(items["VIP"].select_one(".sold-out"))
        self.assertIsNone(items["Late"].find("a"))
        self.assertIsNotNone(items["Late"].select_one(".not-on-sale"))

    @patch("apps.pages.views.events.get_events_for_parallax", return_value=[])
    @patch("apps.pages.views.events.get_event_by_slug", return_value=None)
    def test_missing_event_is_404(self, mock_event, mock_parallax) -> None:
        self.assertEqual(self.client.get("/events/nope/").status_code, 404)

    @patch("apps.pages.views.events.get_events_for_parallax", return_value=[])
    @patch("apps.pages.views.events.get_event_by_slug")
    def test_event_cache_follows_event_tag(self, mock_event, mock_parallax) -> None:
        mock_event.return_value = self._detail()
        self.client.get("/events/e2/")
        self.assertEqual(self.client.get("/events/e2/")["X-Render-Cache"], "hit")
        cache.revalidate_tag("event-e2")
        self.assertEqual(self.client.get("/events/e2/")["X-Render-Cache"], "miss")

        cache.revalidate_tag("homepage")
        self.assertEqual(self.client.get("/events/e2/")["X-Render-Cache"], "miss")


class TicketCheckoutTests(SimpleTestCase):
    def _event(self, ticket: TicketType, tickets_available: bool = True) -> EventDetail:
        return EventDetail(id="e1", title="Night", slug="e1", tickets_available=tickets_available, ticket_types=(ticket,))

    @patch("apps.pages.views.events.get_event_by_slug")
    def test_on_sale_ticket_redirects_to_payment_link(self, mock_event) -> None:
        mock_event.return_value = self._event(TicketType(key="ga", name="GA", active=True, payment_link="https://pay.example.com/ga"))
        response = self.client.get("/events/e1/tickets/ga/")
        self.assertRedirects(response, "https://pay.example.com/ga", fetch_redirect_response=False)

    @patch("apps.pages.views.events.get_event_by_slug")
    def test_closed_sales_go_back_to_event(self, mock_event) -> None:
        past = timezone.now() - timedelta(days=1)
        cases = [
            self._event(TicketType(key="ga", name="GA", active=True, payment_link="https://p.example.com", sales_end=past)),
            self._event(TicketType(key="ga", name="GA", active=True, payment_link="https://p.example.com", stock=0)),
            self._event(TicketType(key="ga", name="GA", active=False, payment_link="https://p.example.com")),
            self._event(TicketType(key="ga", name="GA", active=True, payment_link="https://p.example.com"), tickets_available=False),
            self._event(TicketType(key="ga", name="GA", active=True, payment_link="javascript:alert(1)")),
            self._event(TicketType(key="other", name="VIP", active=True, payment_link="https://p.example.com")),
        ]
        for event in cases:
            mock_event.return_value = event
            response = self.client.get("/events/e1/tickets/ga/")
            self.assertRedirects(response, "/events/e1/", fetch_redirect_response=False)

    @patch("apps.pages.views.events.get_event_by_slug", return_value=None)
    def test_unknown_event_is_404(self, mock_event) -> None:
        self.assertEqual(self.client.get("/events/e1/tickets/ga/").status_code, 404)


class StoriesPagesTests(PageTestCase):
    @patch("apps.pages.views.stories.get_all_blog_posts")
    def test_first_four_are_featured(self, mock_posts) -> None:
        mock_posts.return_value = [_post(f"p{i}") for i in range(6)]
        response = self.client.get("/stories/")
        self.assertEqual([p.slug for p in response.context["featured"]], ["p0", "p1", "p2", "p3"])
        self.assertEqual([p.slug for p in response.context["others"]], ["p4", "p5"])

    @patch("apps.pages.views.stories.get_blog_post_by_slug")
    def test_story_has_back_button_and_body(self, mock_post) -> None:
        mock_post.return_value = BlogPost(
            id="p1",
            title="Story one",
            slug="p1",
            body=({"_type": "block", "style": "normal", "children": [{"_type": "span", "text": "Hello <world>"}]},),
        )
        response = self.client.get("/stories/p1/")
        self.assertEqual(response.context["back"].url, "/stories/")
        self.assertContains(response, "Hello &lt;world&gt;")

        response = self.client.get("/blog/p1/")
        self.assertEqual(response.context["back"].url, "/")

    @patch("apps.pages.views.stories.get_blog_post_by_slug", return_value=None)
    def test_missing_post_is_404(self, mock_post) -> None:
        self.assertEqual(self.client.get("/stories/nope/").status_code, 404)
        self.assertEqual(self.client.get("/blog/nope/").status_code, 404)


class OtherPagesTests(PageTestCase):
    @patch("apps.pages.views.artists.get_all_artists", return_value=[])
    def test_artists_empty_state(self, mock_artists) -> None:
        self.assertContains(self.client.get("/artists/"), "No artists yet.")

    def test_archives_shell_points_at_gallery_endpoint(self) -> None:
        response = self.client.get("/archives/")
        self.assertContains(response, 'data-gallery-endpoint="/api/gallery-images"')

    @patch("apps.pages.views.merch.get_product_by_slug")
    @patch("apps.pages.views.merch.get_all_products")
    def test_merch_listing_and_detail(self, mock_products, mock_product) -> None:
        product = Product(id="p", name="Tote bag", slug="tote", price=5000, stock=0)
        mock_products.return_value = [product]
        mock_product.return_value = product
        self.assertContains(self.client.get("/merch/"), 'href="/merch/tote/"')
        self.assertContains(self.client.get("/merch/tote/"), "Sold out")

        mock_product.return_value = None
        self.assertEqual(self.client.get("/merch/missing/").status_code, 404)

    def test_payment_pages_show_order_reference(self) -> None:
        response = self.client.get("/payment/success/?order_id=ORD-42")
        self.assertContains(response, "ORD-42")
        self.assertNotIn("X-Render-Cache", response)
        self.assertContains(self.client.get("/payment/error/"), "Payment cancelled")

    def test_legal_pages_are_translated(self) -> None:
        self.assertContains(self.client.get("/privacy/"), "Privacy policy")
        self.assertContains(self.client.get("/terms/?lang=en"), "Terms of use")

    def test_default_share_image_is_shipped(self) -> None:
        image = settings.SEO_DEFAULTS["default_image"]
        self.assertIsNotNone(finders.find(image.removeprefix(settings.STATIC_URL)))

        response = self.client.get("/privacy/")
        self.assertTrue(response.context["meta"].image.endswith(image))

    @patch("apps.pages.views.contact.submit_contact", return_value={"success": "Email sent successfully"})
    def test_contact_form_posts_inline(self, mock_submit) -> None:
        response = self.client.post("/contact/", {"email": "a@b.co", "message": "Hi"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(mock_submit.call_args[0][0]["type"], "contact")
        self.assertContains(response, "Your message has been sent")

    @patch("apps.pages.views.contact.submit_contact", return_value={"error": "Invalid email address"})
    def test_contact_form_keeps_input_on_error(self, mock_submit) -> None:
        response = self.client.post("/contact/", {"email": "nope", "message": "Hi there"})
        self.assertContains(response, "Invalid email address")
        self.assertContains(response, "Hi there")


class NotFoundPageTests(SimpleTestCase):
    def test_unknown_route_is_404(self) -> None:
        response = self.client.get("/no/such/page/?lang=fr")
        self.assertEqual(response.status_code, 404)
