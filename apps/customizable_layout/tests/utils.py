"""Builders for layout configs used across the test suite."""

from __future__ import annotations

from typing import Any

from apps.customizable_layout.layout_config import CustomizableLayout, CustomizableLayoutConfig


def column(container_name: str, *components: Any, width: str = "1fr") -> dict[str, Any]:
    items = [
        {"componentName": component} if isinstance(component, str) else dict(component)
        for component in components
    ]
    return {"containerName": container_name, "width": width, "items": items}


def config_dict(
    name: str = "dashboard",
    version: Any = 1,
    mobile: list[dict[str, Any]] | None = None,
    tablet: list[dict[str, Any]] | None = None,
    desktop: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    data: dict[str, Any] = {"name": name, "version": version}
    data["mobile"] = {"lists": mobile if mobile is not None else [column("main", "x")]}
    if tablet is not None:
        data["tablet"] = {"lists": tablet}
    if desktop is not None:
        data["desktop"] = {"lists": desktop}
    return data


def make_config(**kwargs: Any) -> CustomizableLayoutConfig:
    return CustomizableLayoutConfig.from_dict(config_dict(**kwargs))


def make_layout(*lists: dict[str, Any]) -> CustomizableLayout:
    return CustomizableLayout.from_dict({"lists": list(lists)})


def names_by_container(layout: CustomizableLayout) -> dict[str, list[str]]:
    return {entry.container_name: entry.component_names for entry in layout.lists}
