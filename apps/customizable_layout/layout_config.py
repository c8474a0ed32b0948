"""Versioned, breakpoint-keyed layout configuration.

The JSON shape persisted for a layout named ``"dashboard"`` looks like::

    {
        "name": "dashboard",
        "version": 3,
        "mobile": {
            "lists": [
                {
                    "containerName": "main",
                    "width": "1fr",
                    "connectedTo": [],
                    "items": [{"componentName": "sales-chart", "title": "Sales"}]
                }
            ]
        },
        "tablet": {...},
        "desktop": {...}
    }

Everything on an item besides ``componentName`` is component metadata and is
carried through untouched. ``connectedTo`` is derived data; it is stored for
the benefit of clients but recomputed by the mutator on every change.
"""

from __future__ import annotations

import copy
import json
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from .constants import DEFAULT_COLUMN_WIDTH, LAYOUT_TYPES, LayoutType
from .exceptions import InvalidLayoutConfig


@dataclass
class LayoutElement:
    """Reference to one placeable component."""

    component_name: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutElement":
        metadata = {key: value for key, value in data.items() if key != "componentName"}
        return cls(component_name=data["componentName"], metadata=copy.deepcopy(metadata))

    def to_dict(self) -> dict[str, Any]:
        return {"componentName": self.component_name, **copy.deepcopy(self.metadata)}

    def clone(self) -> "LayoutElement":
        return LayoutElement(self.component_name, copy.deepcopy(self.metadata))


@dataclass
class LayoutList:
    """An ordered container of elements; also a drop target."""

    container_name: str
    items: list[LayoutElement] = field(default_factory=list)
    width: str = DEFAULT_COLUMN_WIDTH
    connected_to: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutList":
        return cls(
            container_name=data["containerName"],
            items=[LayoutElement.from_dict(item) for item in data.get("items") or ()],
            width=DEFAULT_COLUMN_WIDTH if data.get("width") is None else data["width"],
            connected_to=list(data.get("connectedTo") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "containerName": self.container_name,
            "width": self.width,
            "connectedTo": list(self.connected_to),
            "items": [item.to_dict() for item in self.items],
        }

    def clone(self) -> "LayoutList":
        return LayoutList(
            container_name=self.container_name,
            items=[item.clone() for item in self.items],
            width=self.width,
            connected_to=list(self.connected_to),
        )

    @property
    def component_names(self) -> list[str]:
        return [item.component_name for item in self.items]


@dataclass
class CustomizableLayout:
    """One breakpoint's arrangement of lists."""

    lists: list[LayoutList] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CustomizableLayout":
        return cls(lists=[LayoutList.from_dict(entry) for entry in data.get("lists") or ()])

    def to_dict(self) -> dict[str, Any]:
        return {"lists": [entry.to_dict() for entry in self.lists]}

    def clone(self) -> "CustomizableLayout":
        return CustomizableLayout(lists=[entry.clone() for entry in self.lists])

    @property
    def container_names(self) -> list[str]:
        return [entry.container_name for entry in self.lists]

    @property
    def component_names(self) -> list[str]:
        """All component names, lists left to right, items top to bottom."""

        return [name for entry in self.lists for name in entry.component_names]

    def find_list(self, container_name: str) -> LayoutList | None:
        for entry in self.lists:
            if entry.container_name == container_name:
                return entry
        return None


@dataclass
class CustomizableLayoutConfig:
    """Top-level persisted unit: a name, a version and one layout per variant."""

    name: str
    version: int | float
    layouts: dict[LayoutType, CustomizableLayout] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "CustomizableLayoutConfig":
        if not is_valid_config(data):
            raise InvalidLayoutConfig("Data does not describe a valid layout config")
        layouts = {
            layout_type: CustomizableLayout.from_dict(data[layout_type.value])
            for layout_type in LAYOUT_TYPES
            if data.get(layout_type.value) is not None
        }
        return cls(name=data["name"], version=data["version"], layouts=layouts)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "version": self.version}
        for layout_type in LAYOUT_TYPES:
            layout = self.layouts.get(layout_type)
            if layout is not None:
                payload[layout_type.value] = layout.to_dict()
        return payload

    def clone(self) -> "CustomizableLayoutConfig":
        return CustomizableLayoutConfig(
            name=self.name,
            version=self.version,
            layouts={key: layout.clone() for key, layout in self.layouts.items()},
        )

    def get_layout(self, layout_type: LayoutType) -> CustomizableLayout | None:
        return self.layouts.get(LayoutType(layout_type))


# ----------------------------------------------------------------------
# Validity predicate
# ----------------------------------------------------------------------
def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_valid_element(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("componentName"), str)


def _is_valid_list(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    if not isinstance(value.get("containerName"), str) or not value["containerName"]:
        return False
    width = value.get("width")
    if width is not None and not isinstance(width, str):
        return False
    connected_to = value.get("connectedTo")
    if connected_to is not None and not (
        _is_sequence(connected_to) and all(isinstance(name, str) for name in connected_to)
    ):
        return False
    items = value.get("items")
    if not _is_sequence(items):
        return False
    return all(_is_valid_element(item) for item in items)


def _is_valid_layout(value: Any, *, require_lists: bool = False) -> bool:
    if not isinstance(value, Mapping):
        return False
    lists = value.get("lists")
    if not _is_sequence(lists):
        return False
    if require_lists and not lists:
        return False
    return all(_is_valid_list(entry) for entry in lists)


def is_valid_config(value: Any) -> bool:
    """Return ``True`` when ``value`` has the shape of a layout config.

    Accepts decoded JSON (or a :class:`CustomizableLayoutConfig`) from any
    source, including untrusted storage, and never raises.
    """

    if isinstance(value, CustomizableLayoutConfig):
        value = value.to_dict()
    if not isinstance(value, Mapping):
        return False

    name = value.get("name")
    if not isinstance(name, str) or not name:
        return False

    version = value.get("version")
    if isinstance(version, bool) or not isinstance(version, (int, float)):
        return False
    if not math.isfinite(version):
        return False

    if not _is_valid_layout(value.get(LayoutType.MOBILE.value), require_lists=True):
        return False
    for layout_type in (LayoutType.TABLET, LayoutType.DESKTOP):
        raw = value.get(layout_type.value)
        if raw is not None and not _is_valid_layout(raw):
            return False
    return True


# ----------------------------------------------------------------------
# JSON codec
# ----------------------------------------------------------------------
def dumps(config: CustomizableLayoutConfig) -> str:
    return json.dumps(config.to_dict())


def loads(raw: str | bytes) -> CustomizableLayoutConfig:
    """Decode a stored JSON document into a config.

    Raises :class:`InvalidLayoutConfig` for malformed JSON as well as for
    well-formed JSON of the wrong shape.
    """

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise InvalidLayoutConfig(f"Stored layout is not valid JSON: {exc}") from exc
    return CustomizableLayoutConfig.from_dict(data)
