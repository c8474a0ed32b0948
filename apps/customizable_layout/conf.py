"""Runtime access to customizable layout settings.

Every ``CUSTOMIZABLE_LAYOUT_*`` name is read from ``django.conf.settings`` on
each access, so ``override_settings`` in tests takes effect immediately.
Unset names fall back to the defaults below.

``CUSTOMIZABLE_LAYOUT_BREAKPOINTS`` may list only some of the ``desktop``,
``tablet`` and ``mobile`` thresholds; the rest are filled from
:data:`~apps.customizable_layout.constants.DEFAULT_BREAKPOINTS`. Any other key
is a configuration error.

``CUSTOMIZABLE_LAYOUT_STORE`` names the store class used by the views. The
in-process ``MemoryStore`` is meant for tests and previews only.
"""
from __future__ import annotations

from typing import Any, Mapping

from django.conf import settings as django_settings
from django.core.exceptions import ImproperlyConfigured

from .constants import DEFAULT_BREAKPOINTS, DEFAULT_COLUMN_WIDTH, MOBILE_DRAG_DELAY

__all__ = ["settings", "LayoutSettings"]


DEFAULTS: dict[str, Any] = {
    "CUSTOMIZABLE_LAYOUT_BREAKPOINTS": dict(DEFAULT_BREAKPOINTS),
    "CUSTOMIZABLE_LAYOUT_MOBILE_DRAG_DELAY": MOBILE_DRAG_DELAY,
    "CUSTOMIZABLE_LAYOUT_DEFAULT_COLUMN_WIDTH": DEFAULT_COLUMN_WIDTH,
    "CUSTOMIZABLE_LAYOUT_STORE": "apps.customizable_layout.storage.DatabaseStore",
    "CUSTOMIZABLE_LAYOUT_CACHE_ALIAS": "default",
    "CUSTOMIZABLE_LAYOUT_MEMORY_MAX_NAMESPACES": 256,
    "CUSTOMIZABLE_LAYOUT_DEFAULTS": [],
}


def _merge_breakpoints(value: Any) -> dict[str, Any]:
    if value is None:
        return dict(DEFAULT_BREAKPOINTS)
    if not isinstance(value, Mapping):
        raise ImproperlyConfigured("CUSTOMIZABLE_LAYOUT_BREAKPOINTS must be a mapping")
    unknown = sorted(set(value) - set(DEFAULT_BREAKPOINTS))
    if unknown:
        raise ImproperlyConfigured(
            "CUSTOMIZABLE_LAYOUT_BREAKPOINTS has unknown key(s): " + ", ".join(map(str, unknown))
        )
    return {**DEFAULT_BREAKPOINTS, **value}


class LayoutSettings:
    """Read ``CUSTOMIZABLE_LAYOUT_*`` settings, applying defaults.

    Names outside :data:`DEFAULTS` are rejected so typos surface as an
    ``AttributeError`` instead of silently reading an unrelated setting.
    """

    normalizers = {
        "CUSTOMIZABLE_LAYOUT_BREAKPOINTS": _merge_breakpoints,
    }

    def __init__(self, defaults: Mapping[str, Any]):
        self.defaults = dict(defaults)

    def __getattr__(self, attr: str) -> Any:
        if attr == "defaults" or attr not in self.defaults:
            raise AttributeError(f"Unknown customizable layout setting {attr!r}")
        value = getattr(django_settings, attr, self.defaults[attr])
        normalize = self.normalizers.get(attr)
        return normalize(value) if normalize else value


settings = LayoutSettings(DEFAULTS)
