from django.urls import path

from .views import ContactApiView

app_name = "messaging"

urlpatterns = [
    path("contact", ContactApiView.as_view(), name="contact_api"),
]
