"""Pure operations on a single breakpoint's layout.

Every function takes a :class:`CustomizableLayout` and returns a new one with
``connected_to`` recomputed; the argument is never modified. Index handling
mirrors the drag-and-drop array helpers used by the client: indices are
clamped into range rather than rejected.
"""

from __future__ import annotations

import logging
import uuid

from apps.customizable_layout.conf import settings
from apps.customizable_layout.constants import LayoutType
from apps.customizable_layout.exceptions import ContainerNotFound, InvalidLayoutConfig
from apps.customizable_layout.layout_config import (
    CustomizableLayout,
    CustomizableLayoutConfig,
    LayoutList,
)

log = logging.getLogger(__name__)


def _clamp(value: int, maximum: int) -> int:
    return max(0, min(maximum, value))


def _require_list(layout: CustomizableLayout, container_name: str) -> LayoutList:
    entry = layout.find_list(container_name)
    if entry is None:
        raise ContainerNotFound(container_name)
    return entry


def _link(layout: CustomizableLayout) -> CustomizableLayout:
    names = layout.container_names
    for entry in layout.lists:
        entry.connected_to = [name for name in names if name != entry.container_name]
    return layout


def connect(layout: CustomizableLayout) -> CustomizableLayout:
    """Return a copy where each list is connected to every other list."""

    return _link(layout.clone())


def template_columns(layout: CustomizableLayout) -> str:
    """Grid track string, e.g. ``"1fr 2fr 1fr"``."""

    return " ".join(entry.width for entry in layout.lists)


def new_list(width: str | None = None) -> LayoutList:
    return LayoutList(
        container_name=str(uuid.uuid4()),
        items=[],
        width=width or settings.CUSTOMIZABLE_LAYOUT_DEFAULT_COLUMN_WIDTH,
        connected_to=[],
    )


# ----------------------------------------------------------------------
# Drag and drop
# ----------------------------------------------------------------------
def move_within_list(
    layout: CustomizableLayout,
    container_name: str,
    from_index: int,
    to_index: int,
) -> CustomizableLayout:
    result = layout.clone()
    items = _require_list(result, container_name).items
    if items:
        source = _clamp(from_index, len(items) - 1)
        target = _clamp(to_index, len(items) - 1)
        if source != target:
            items.insert(target, items.pop(source))
    return _link(result)


def transfer_between_lists(
    layout: CustomizableLayout,
    source_container: str,
    dest_container: str,
    from_index: int,
    to_index: int,
) -> CustomizableLayout:
    if source_container == dest_container:
        return move_within_list(layout, source_container, from_index, to_index)

    result = layout.clone()
    source = _require_list(result, source_container).items
    dest = _require_list(result, dest_container).items
    if source:
        element = source.pop(_clamp(from_index, len(source) - 1))
        dest.insert(_clamp(to_index, len(dest)), element)
    return _link(result)


# ----------------------------------------------------------------------
# Columns
# ----------------------------------------------------------------------
def add_column_right(layout: CustomizableLayout, *, width: str | None = None) -> CustomizableLayout:
    result = layout.clone()
    result.lists.append(new_list(width))
    return _link(result)


def add_column_left(layout: CustomizableLayout, *, width: str | None = None) -> CustomizableLayout:
    result = layout.clone()
    result.lists.insert(0, new_list(width))
    return _link(result)


def remove_column_left(layout: CustomizableLayout) -> CustomizableLayout:
    result = layout.clone()
    if len(result.lists) <= 1:
        log.warning("Refusing to remove the last column of a layout")
        return _link(result)
    removed = result.lists.pop(0)
    result.lists[0].items.extend(removed.items)
    return _link(result)


def remove_column_right(layout: CustomizableLayout) -> CustomizableLayout:
    result = layout.clone()
    if len(result.lists) <= 1:
        log.warning("Refusing to remove the last column of a layout")
        return _link(result)
    removed = result.lists.pop()
    result.lists[-1].items.extend(removed.items)
    return _link(result)


# ----------------------------------------------------------------------
# Reset
# ----------------------------------------------------------------------
def reset(default: CustomizableLayoutConfig, layout_type: LayoutType) -> CustomizableLayout:
    """Connected copy of the default arrangement for ``layout_type``.

    Falls back to the default's mobile layout when the variant is absent.
    """

    layout = default.get_layout(layout_type) or default.get_layout(LayoutType.MOBILE)
    if layout is None:
        raise InvalidLayoutConfig(f"Default layout {default.name!r} has no mobile variant")
    return connect(layout)
