from django.urls import path

from .views import ImageProxyView

app_name = "cms"

urlpatterns = [
    path("_image", ImageProxyView.as_view(), name="image"),
]
