"""Merge a user's stored layout with a newer default layout.

Stored layouts carry the user's customisation (column count, ordering,
placement). When the default layout gains components, those components must
show up for existing users without discarding that customisation. Each
variant is reconciled on its own: components present in the default but not
in the stored layout are inserted into the stored list sharing the default's
container name, at the default's index (or at the top when that index no
longer fits).

A component whose default container no longer exists in the stored layout is
skipped. Users who deleted a column therefore do not get components that the
default later adds to it.
"""

from __future__ import annotations

import logging
from typing import Any

from apps.customizable_layout.constants import LAYOUT_TYPES, LayoutType
from apps.customizable_layout.layout_config import (
    CustomizableLayout,
    CustomizableLayoutConfig,
    LayoutElement,
    is_valid_config,
)

log = logging.getLogger(__name__)


def missing_component_names(stored: CustomizableLayout, default: CustomizableLayout) -> list[str]:
    """Names present in ``default`` but not ``stored``, in default order."""

    present = set(stored.component_names)
    missing: list[str] = []
    for name in default.component_names:
        if name not in present and name not in missing:
            missing.append(name)
    return missing


def _find_origin(default: CustomizableLayout, component_name: str) -> tuple[str, int, LayoutElement] | None:
    for entry in default.lists:
        for index, item in enumerate(entry.items):
            if item.component_name == component_name:
                return entry.container_name, index, item
    return None


def reconcile_layout(stored: CustomizableLayout, default: CustomizableLayout) -> list[str]:
    """Insert missing default components into ``stored`` in place.

    Returns the names that were inserted.
    """

    inserted: list[str] = []
    for component_name in missing_component_names(stored, default):
        origin = _find_origin(default, component_name)
        if origin is None:  # pragma: no cover - names come from default
            continue
        container_name, index, element = origin

        target = stored.find_list(container_name)
        if target is None:
            log.debug(
                "Skipping %s: container %s no longer exists in stored layout",
                component_name,
                container_name,
            )
            continue

        if index > len(target.items):
            index = 0
        target.items.insert(index, element.clone())
        inserted.append(component_name)
        log.debug("Inserted %s into %s at %s", component_name, container_name, index)
    return inserted


def reconcile(
    stored: CustomizableLayoutConfig,
    default: CustomizableLayoutConfig,
) -> CustomizableLayoutConfig:
    """Bring every variant of ``stored`` up to date with ``default``.

    ``stored`` is modified in place and returned; ``default`` is left
    untouched. Running it twice is a no-op the second time.
    """

    for layout_type in LAYOUT_TYPES:
        stored_layout = stored.get_layout(layout_type)
        default_layout = default.get_layout(layout_type)
        if stored_layout is None or default_layout is None:
            continue
        inserted = reconcile_layout(stored_layout, default_layout)
        if inserted:
            log.info(
                "Added %d new component(s) to %s layout of %s: %s",
                len(inserted),
                LayoutType(layout_type).label,
                stored.name,
                ", ".join(inserted),
            )
    return stored


def resolve_working_config(raw_stored: Any, default: CustomizableLayoutConfig) -> CustomizableLayoutConfig:
    """Decide the working config from whatever storage returned.

    A valid stored config whose version does not exceed the default's is
    reconciled and used. Anything else (absent, malformed, or written by a
    newer default) is discarded in favour of a copy of ``default``.
    """

    if raw_stored is None:
        log.info("No stored layout for %s; using default v%s", default.name, default.version)
        return default.clone()

    if not is_valid_config(raw_stored):
        log.warning("Discarding invalid stored layout for %s", default.name)
        return default.clone()

    if isinstance(raw_stored, CustomizableLayoutConfig):
        stored = raw_stored.clone()
    else:
        try:
            stored = CustomizableLayoutConfig.from_dict(raw_stored)
        except (TypeError, ValueError, KeyError) as exc:
            log.warning("Discarding unreadable stored layout for %s: %s", default.name, exc)
            return default.clone()

    if stored.version > default.version:
        log.warning(
            "Stored layout %s is v%s but default is v%s; using default",
            default.name,
            stored.version,
            default.version,
        )
        return default.clone()

    return reconcile(stored, default)
