from __future__ import annotations

from apps.cms.queries import get_latest_blog_posts, get_latest_events

from ..mixins import ContentPageView


class HomeView(ContentPageView):
    """Hero, event showcase and latest stories."""

    template_name = "pages/home.html"
    cache_tags = ("homepage", "events", "posts")

    def get_fetches(self):
        return {"latest_events": get_latest_events, "latest_posts": get_latest_blog_posts}

    def get_content(self, results):
        homepage = self.homepage
        events = list(homepage.featured_events) if homepage and homepage.featured_events else results["latest_events"]
        posts = list(homepage.featured_articles) if homepage and homepage.featured_articles else results["latest_posts"]
        return {
            "events": events,
            "posts": posts,
            "hero_items": [item for item in homepage.hero_items if item.is_active] if homepage else [],
            "hero_video_urls": homepage.hero_video_urls if homepage else [],
        }
