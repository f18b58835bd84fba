from __future__ import annotations

from django.urls import reverse

from ..mixins import ContentPageView


class ArchivesView(ContentPageView):
    """Shell page; the grid is filled client-side from the gallery endpoint."""

    template_name = "pages/archives.html"
    cache_tags = ("media",)
    meta_title_key = "archivesPage.metadata.title"
    meta_description_key = "archivesPage.metadata.description"

    def get_content(self, results):
        return {"gallery_endpoint": reverse("api:gallery_images")}
