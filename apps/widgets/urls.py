from django.urls import path

from .toggle import ThemeToggleView

app_name = "widgets"

urlpatterns = [
    path("theme/toggle/", ThemeToggleView.as_view(), name="theme_toggle"),
]
