from django.urls import path

from .views import SetLanguageView

app_name = "i18n"

urlpatterns = [
    path("lang/<str:code>/", SetLanguageView.as_view(), name="set_language"),
]
