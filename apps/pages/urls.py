from django.urls import path

from .views import (
    ArchivesView,
    ArtistsView,
    BlogPostView,
    ContactView,
    EventDetailView,
    EventsIndexView,
    HomeView,
    MerchDetailView,
    MerchView,
    PaymentErrorView,
    PaymentSuccessView,
    PrivacyView,
    StoriesView,
    StoryView,
    TermsView,
    TicketCheckoutView,
)

app_name = "pages"
urlpatterns = [
    path("", HomeView.as_view(), name="home"),
    path("events/", EventsIndexView.as_view(), name="events"),
    path("events/<slug:slug>/", EventDetailView.as_view(), name="event-detail"),
    path("events/<slug:slug>/tickets/<str:key>/", TicketCheckoutView.as_view(), name="ticket-checkout"),
    path("artists/", ArtistsView.as_view(), name="artists"),
    path("stories/", StoriesView.as_view(), name="stories"),
    path("stories/<slug:slug>/", StoryView.as_view(), name="story"),
    path("blog/<slug:slug>/", BlogPostView.as_view(), name="blog-post"),
    path("archives/", ArchivesView.as_view(), name="archives"),
    path("merch/", MerchView.as_view(), name="merch"),
    path("merch/<slug:slug>/", MerchDetailView.as_view(), name="merch-detail"),
    path("payment/success/", PaymentSuccessView.as_view(), name="payment-success"),
    path("payment/error/", PaymentErrorView.as_view(), name="payment-error"),
    path("contact/", ContactView.as_view(), name="contact"),
    path("privacy/", PrivacyView.as_view(), name="privacy"),
    path("terms/", TermsView.as_view(), name="terms"),
]
