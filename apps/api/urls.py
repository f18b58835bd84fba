from django.urls import path

from .views import GalleryImagesView, MusicTracksView, RevalidateView

app_name = "api"

urlpatterns = [
    path("revalidate", RevalidateView.as_view(), name="revalidate"),
    path("gallery-images", GalleryImagesView.as_view(), name="gallery_images"),
    path("music-tracks", MusicTracksView.as_view(), name="music_tracks"),
]
