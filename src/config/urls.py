from django.urls import include, path

urlpatterns = [
    path("", include("modules.core.urls")),
    # Domain modules (versioned API)
    path("api/v1/", include("modules.catalog.urls")),
]
