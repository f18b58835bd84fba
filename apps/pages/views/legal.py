from __future__ import annotations

from ..mixins import ContentPageView


class PrivacyView(ContentPageView):
    template_name = "pages/privacy.html"

    def get_meta_title(self, page):
        return page.t("privacyPage.title")


class TermsView(ContentPageView):
    template_name = "pages/terms.html"

    def get_meta_title(self, page):
        return page.t("termsPage.title")
