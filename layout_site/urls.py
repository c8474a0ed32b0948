"""
URL configuration for layout_site project.

Layout endpoints are mounted under ``/layouts/``:

    GET  /layouts/<name>/?width=<px>   current layout for that viewport width
    POST /layouts/<name>/events/       apply a drop, column or reset event
"""
from django.urls import include, path

urlpatterns = [
    path("layouts/", include("apps.customizable_layout.urls")),
]
