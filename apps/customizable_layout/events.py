"""Event dispatch for the layout engine.

``handle_event(state, event, default=...)`` is a pure function returning the
next state and the side effects the caller must carry out, in order:
persisting the config and announcing the changed layout. Nothing in here
touches storage or signals, which keeps every transition testable with plain
values.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Union

from .constants import LayoutType
from .exceptions import LayoutError, UnknownEvent
from .layout_config import CustomizableLayout, CustomizableLayoutConfig
from .services import mutator
from .services.breakpoints import Breakpoints, drag_delay, select_layout_type
from .services.reconciler import resolve_working_config


# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class ViewportResized:
    width: int


@dataclass(frozen=True)
class ItemDropped:
    """Completion of a drag: where the item came from and where it landed."""

    previous_container: str
    container: str
    previous_index: int
    current_index: int
    # Clients that can compare container objects directly may say so; when
    # omitted the container ids decide.
    same_container: bool | None = None

    @property
    def is_same_container(self) -> bool:
        if self.same_container is None:
            return self.previous_container == self.container
        return self.same_container


@dataclass(frozen=True)
class AddColumnLeft:
    pass


@dataclass(frozen=True)
class AddColumnRight:
    pass


@dataclass(frozen=True)
class RemoveColumnLeft:
    pass


@dataclass(frozen=True)
class RemoveColumnRight:
    pass


@dataclass(frozen=True)
class ResetLayout:
    pass


Event = Union[
    ViewportResized,
    ItemDropped,
    AddColumnLeft,
    AddColumnRight,
    RemoveColumnLeft,
    RemoveColumnRight,
    ResetLayout,
]


# ----------------------------------------------------------------------
# Effects
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class PersistConfig:
    config: CustomizableLayoutConfig


@dataclass(frozen=True)
class LayoutChanged:
    layout_type: LayoutType
    layout: CustomizableLayout
    template_columns: str
    drag_delay: int


Effect = Union[PersistConfig, LayoutChanged]


# ----------------------------------------------------------------------
# State
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class EngineState:
    """Working config plus the variant selected by the viewport.

    The config is replaced, never modified, when a mutation is applied.
    """

    config: CustomizableLayoutConfig
    layout_type: LayoutType

    @property
    def effective_layout_type(self) -> LayoutType:
        """Selected variant, or mobile when the config lacks it."""

        if self.config.get_layout(self.layout_type) is not None:
            return self.layout_type
        return LayoutType.MOBILE

    @property
    def layout(self) -> CustomizableLayout:
        return mutator.connect(self.config.get_layout(self.effective_layout_type))

    def with_layout(self, layout: CustomizableLayout) -> "EngineState":
        config = self.config.clone()
        config.layouts[self.effective_layout_type] = layout.clone()
        return replace(self, config=config)


def layout_changed(state: EngineState) -> LayoutChanged:
    layout = state.layout
    return LayoutChanged(
        layout_type=state.layout_type,
        layout=layout,
        template_columns=mutator.template_columns(layout),
        drag_delay=drag_delay(state.layout_type),
    )


def initialize(
    default: CustomizableLayoutConfig,
    raw_stored: Any,
    width: Any,
    *,
    breakpoints: Breakpoints | None = None,
) -> tuple[EngineState, list[Effect]]:
    """Build the first state from what storage returned and the current width."""

    state = EngineState(
        config=resolve_working_config(raw_stored, default),
        layout_type=select_layout_type(width, breakpoints),
    )
    return state, [layout_changed(state)]


# ----------------------------------------------------------------------
# Dispatch
# ----------------------------------------------------------------------
def _drop(layout: CustomizableLayout, event: ItemDropped) -> CustomizableLayout:
    if event.is_same_container:
        return mutator.move_within_list(
            layout, event.container, event.previous_index, event.current_index
        )
    return mutator.transfer_between_lists(
        layout,
        event.previous_container,
        event.container,
        event.previous_index,
        event.current_index,
    )


_MUTATIONS: dict[type, Callable[[CustomizableLayout, Any], CustomizableLayout]] = {
    ItemDropped: _drop,
    AddColumnLeft: lambda layout, event: mutator.add_column_left(layout),
    AddColumnRight: lambda layout, event: mutator.add_column_right(layout),
    RemoveColumnLeft: lambda layout, event: mutator.remove_column_left(layout),
    RemoveColumnRight: lambda layout, event: mutator.remove_column_right(layout),
}


def handle_event(
    state: EngineState,
    event: Event,
    *,
    default: CustomizableLayoutConfig,
    breakpoints: Breakpoints | None = None,
) -> tuple[EngineState, list[Effect]]:
    """Apply ``event`` to ``state``.

    Resizes only produce a notification when the selected variant changes and
    are never persisted. Every other event yields the new config to persist
    followed by the changed layout.
    """

    if isinstance(event, ViewportResized):
        layout_type = select_layout_type(event.width, breakpoints)
        if layout_type == state.layout_type:
            return state, []
        new_state = replace(state, layout_type=layout_type)
        return new_state, [layout_changed(new_state)]

    if isinstance(event, ResetLayout):
        layout = mutator.reset(default, state.effective_layout_type)
    else:
        operation = _MUTATIONS.get(type(event))
        if operation is None:
            raise UnknownEvent(f"Unsupported event: {event!r}")
        layout = operation(state.layout, event)

    new_state = state.with_layout(layout)
    return new_state, [PersistConfig(new_state.config), layout_changed(new_state)]


# ----------------------------------------------------------------------
# Payload parsing
# ----------------------------------------------------------------------
def _require_int(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key)
    if isinstance(value, bool):
        raise LayoutError(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise LayoutError(f"{key} must be an integer") from None


def _require_str(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise LayoutError(f"{key} is required")
    return value


def _parse_drop(payload: Mapping[str, Any]) -> ItemDropped:
    same = payload.get("sameContainer")
    return ItemDropped(
        previous_container=_require_str(payload, "previousContainer"),
        container=_require_str(payload, "container"),
        previous_index=_require_int(payload, "previousIndex"),
        current_index=_require_int(payload, "currentIndex"),
        same_container=same if isinstance(same, bool) else None,
    )


_PARSERS: dict[str, Callable[[Mapping[str, Any]], Event]] = {
    "resize": lambda payload: ViewportResized(width=_require_int(payload, "width")),
    "drop": _parse_drop,
    "add_column_left": lambda payload: AddColumnLeft(),
    "add_column_right": lambda payload: AddColumnRight(),
    "remove_column_left": lambda payload: RemoveColumnLeft(),
    "remove_column_right": lambda payload: RemoveColumnRight(),
    "reset": lambda payload: ResetLayout(),
}


def event_from_payload(payload: Mapping[str, Any]) -> Event:
    """Build an event from a client payload such as ``{"type": "drop", ...}``."""

    event_type = payload.get("type") if isinstance(payload, Mapping) else None
    parser = _PARSERS.get(event_type) if isinstance(event_type, str) else None
    if parser is None:
        raise UnknownEvent(f"Unknown event type: {event_type!r}")
    return parser(payload)
