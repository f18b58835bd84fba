from __future__ import annotations

from django.http import Http404

from apps.cms.queries import get_all_products, get_product_by_slug

from ..mixins import ContentPageView


class MerchView(ContentPageView):
    template_name = "pages/merch.html"
    cache_tags = ("products",)
    meta_title_key = "merchPage.metadata.title"
    meta_description_key = "merchPage.metadata.description"

    def get_fetches(self):
        return {"products": get_all_products}


class MerchDetailView(ContentPageView):
    template_name = "pages/merch_detail.html"
    meta_type = "product"

    def get_cache_tags(self):
        return [f"product-{self.kwargs['slug']}", "products"]

    def get_fetches(self):
        slug = self.kwargs["slug"]
        return {"product": lambda: get_product_by_slug(slug)}

    def get_content(self, results):
        product = results["product"]
        if product is None:
            raise Http404("Product not found")
        self.product = product
        return {"product": product}

    def get_meta_title(self, page):
        return self.product.name

    def get_meta_description(self, page):
        return self.product.description or ""

    def get_meta_image(self):
        return self.product.main_image_url
