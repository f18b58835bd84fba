from __future__ import annotations

from apps.messaging.actions import submit_contact
from apps.messaging.constants import SUBMISSION_TYPE_CONTACT

from ..mixins import ContentPageView


class ContactView(ContentPageView):
    """Contact form; the relay result is rendered inline."""

    template_name = "pages/contact.html"
    render_cache = False
    meta_title_key = "contactPage.metadata.title"
    meta_description_key = "contactPage.metadata.description"
    result = None
    submitted = None

    def post(self, request, *args, **kwargs):
        data = request.POST.dict()
        data.setdefault("type", SUBMISSION_TYPE_CONTACT)
        self.submitted = data
        self.result = submit_contact(data)
        return self.get(request, *args, **kwargs)

    def get_content(self, results):
        form = {} if not self.result or "success" in self.result else self.submitted
        return {"result": self.result, "form": form or {}}
