from __future__ import annotations

from apps.cms.queries import get_all_artists

from ..mixins import ContentPageView


class ArtistsView(ContentPageView):
    template_name = "pages/artists.html"
    cache_tags = ("artists",)
    meta_title_key = "artistsPage.metadata.title"

    def get_fetches(self):
        return {"artists": get_all_artists}

    def get_content(self, results):
        artists = results["artists"]
        return {
            "residents": [artist for artist in artists if artist.is_resident],
            "guests": [artist for artist in artists if not artist.is_resident],
        }
