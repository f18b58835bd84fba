from __future__ import annotations

from ..mixins import ContentPageView

ORDER_ID_PARAMS = ("order_id", "reference", "ref")


class PaymentResultView(ContentPageView):
    # Query strings carry per-order references; never share the rendered page.
    render_cache = False
    catalog_section = "paymentSuccess"

    def get_meta_title(self, page):
        return page.t(f"{self.catalog_section}.title")

    def get_content(self, results):
        order_id = next((self.request.GET[name] for name in ORDER_ID_PARAMS if self.request.GET.get(name)), "")
        return {"order_id": order_id[:64], "section": self.catalog_section}


class PaymentSuccessView(PaymentResultView):
    template_name = "pages/payment_success.html"


class PaymentErrorView(PaymentResultView):
    template_name = "pages/payment_error.html"
    catalog_section = "paymentCancel"
