from django.urls import path

from .views import LayoutEventView, LayoutStateView

app_name = "customizable_layout"

urlpatterns = [
    path("<str:name>/", LayoutStateView.as_view(), name="layout_state"),
    path("<str:name>/events/", LayoutEventView.as_view(), name="layout_event"),
]
