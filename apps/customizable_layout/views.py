"""JSON endpoints exposing a user's layout and accepting layout events."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import Http404, HttpResponseBadRequest, JsonResponse
from django.views import generic

from .engine import LayoutEngine
from .events import event_from_payload
from .exceptions import LayoutError, UnknownLayout
from .layout_config import CustomizableLayoutConfig
from .registry import default_layouts
from .storage import get_store

log = logging.getLogger(__name__)


def serialize_engine(engine: LayoutEngine) -> Dict[str, Any]:
    """Payload a client needs to render the current variant."""

    return {
        "name": engine.name,
        "version": engine.version,
        "layoutType": engine.layout_type.value,
        "dragDelay": engine.drag_delay,
        "templateColumns": engine.template_columns,
        "layout": engine.layout.to_dict(),
    }


class LayoutEngineMixin(LoginRequiredMixin):
    """Resolve the default layout named in the URL and build an engine for it."""

    name_url_kwarg = "name"

    def get_default_layout(self) -> CustomizableLayoutConfig:
        name = self.kwargs.get(self.name_url_kwarg)
        try:
            return default_layouts.get(name)
        except UnknownLayout:
            raise Http404(f"Unknown layout {name!r}") from None

    def build_engine(self, width: Any) -> LayoutEngine:
        return LayoutEngine(
            self.get_default_layout(),
            get_store(self.request.user),
            width=width,
        )


class LayoutStateView(LayoutEngineMixin, generic.View):
    """Return the current layout for the viewport width in ``?width=``."""

    http_method_names = ["get"]

    def get(self, request, *args, **kwargs):  # type: ignore[override]
        engine = self.build_engine(request.GET.get("width"))
        return JsonResponse(serialize_engine(engine))


class LayoutEventView(LayoutEngineMixin, generic.View):
    """Apply one layout event (drop, column change, reset, resize)."""

    http_method_names = ["post"]

    def post(self, request, *args, **kwargs):  # type: ignore[override]
        try:
            data = json.loads(request.body.decode("utf-8") or "{}")
        except (UnicodeDecodeError, json.JSONDecodeError):
            return HttpResponseBadRequest("Invalid JSON payload")
        if not isinstance(data, dict):
            return HttpResponseBadRequest("Payload must be a JSON object")

        try:
            event = event_from_payload(data)
        except LayoutError as exc:
            return HttpResponseBadRequest(str(exc))

        engine = self.build_engine(data.get("width"))
        try:
            engine.dispatch(event)
        except LayoutError as exc:
            log.warning("Rejected %s event for %s: %s", data.get("type"), engine.name, exc)
            return HttpResponseBadRequest(str(exc))

        return JsonResponse(serialize_engine(engine))
