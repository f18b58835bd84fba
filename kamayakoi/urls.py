from django.urls import include, path

urlpatterns = [
    path("api/", include("apps.api.urls")),
    path("api/", include("apps.messaging.urls")),
    path("", include("apps.cms.urls")),
    path("", include("apps.i18n.urls")),
    path("", include("apps.widgets.urls")),
    path("", include("apps.pages.urls")),
]

handler404 = "apps.pages.views.errors.page_not_found"
