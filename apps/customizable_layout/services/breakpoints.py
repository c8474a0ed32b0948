"""Map viewport widths to layout variants.

Only two tiers are resolved today: widths up to and including the tablet
threshold select the mobile layout, anything wider selects the tablet
layout. The desktop and mobile thresholds are accepted so callers can pass a
complete configuration, but selection does not consult them yet and the
desktop variant is never chosen.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from apps.customizable_layout.conf import settings
from apps.customizable_layout.constants import DEFAULT_BREAKPOINTS, MOBILE_DRAG_DELAY, LayoutType


def _coerce_int(value: Any, default: int) -> int:
    """Best-effort conversion of ``value`` into an ``int`` with fallback."""

    try:
        if value in {None, ""}:
            raise ValueError
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return int(default)


@dataclass(frozen=True)
class Breakpoints:
    desktop: int = DEFAULT_BREAKPOINTS["desktop"]
    tablet: int = DEFAULT_BREAKPOINTS["tablet"]
    mobile: int = DEFAULT_BREAKPOINTS["mobile"]

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "Breakpoints":
        values = values or {}
        return cls(
            desktop=_coerce_int(values.get("desktop"), DEFAULT_BREAKPOINTS["desktop"]),
            tablet=_coerce_int(values.get("tablet"), DEFAULT_BREAKPOINTS["tablet"]),
            mobile=_coerce_int(values.get("mobile"), DEFAULT_BREAKPOINTS["mobile"]),
        )

    @classmethod
    def from_settings(cls) -> "Breakpoints":
        return cls.from_mapping(settings.CUSTOMIZABLE_LAYOUT_BREAKPOINTS)


def coerce_width(value: Any) -> int:
    return _coerce_int(value, 0)


def select_layout_type(width: Any, breakpoints: Breakpoints | None = None) -> LayoutType:
    breakpoints = breakpoints or Breakpoints.from_settings()
    if coerce_width(width) <= breakpoints.tablet:
        return LayoutType.MOBILE
    # TODO: select LayoutType.DESKTOP above breakpoints.desktop once desktop
    # layouts fall back to tablet, then mobile, when the variant is missing.
    return LayoutType.TABLET


def drag_delay(layout_type: LayoutType, *, mobile_delay: int | None = None) -> int:
    """Delay before a drag starts; longer on touch-sized screens."""

    if layout_type == LayoutType.MOBILE:
        if mobile_delay is None:
            mobile_delay = _coerce_int(settings.CUSTOMIZABLE_LAYOUT_MOBILE_DRAG_DELAY, MOBILE_DRAG_DELAY)
        return mobile_delay
    return 0
