from django.urls import include, path

urlpatterns = [
    path("api/", include("pcn_editor.core.urls")),
]
