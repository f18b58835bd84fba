from .archives import ArchivesView
from .artists import ArtistsView
from .contact import ContactView
from .events import EventDetailView, EventsIndexView, TicketCheckoutView
from .home import HomeView
from .legal import PrivacyView, TermsView
from .merch import MerchDetailView, MerchView
from .payment import PaymentErrorView, PaymentSuccessView
from .stories import BlogPostView, StoriesView, StoryView

__all__ = [
    "ArchivesView",
    "ArtistsView",
    "BlogPostView",
    "ContactView",
    "EventDetailView",
    "EventsIndexView",
    "HomeView",
    "MerchDetailView",
    "MerchView",
    "PaymentErrorView",
    "PaymentSuccessView",
    "PrivacyView",
    "StoriesView",
    "StoryView",
    "TermsView",
    "TicketCheckoutView",
]
