"""Stateful owner of a working layout config."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Iterable

from .constants import LayoutType
from .events import (
    AddColumnLeft,
    AddColumnRight,
    Effect,
    EngineState,
    Event,
    ItemDropped,
    LayoutChanged,
    PersistConfig,
    RemoveColumnLeft,
    RemoveColumnRight,
    ResetLayout,
    ViewportResized,
    handle_event,
    initialize,
)
from .layout_config import CustomizableLayout, CustomizableLayoutConfig
from .services import mutator
from .services.breakpoints import Breakpoints, drag_delay
from .services.persistence import LayoutPersistence
from .signals import layout_changed
from .storage import KeyValueStore

log = logging.getLogger(__name__)

Listener = Callable[[LayoutChanged], Any]


class LayoutEngine:
    """Load, reconcile, mutate and persist one named layout.

    The engine owns its working config exclusively: properties hand out
    copies and every change goes through :meth:`dispatch`. The config is
    stored under the default layout's name after every mutation, and each
    state-affecting event is announced through :data:`layout_changed` and
    any listeners passed in.
    """

    def __init__(
        self,
        default: CustomizableLayoutConfig,
        store: KeyValueStore,
        *,
        width: Any = 0,
        breakpoints: Breakpoints | None = None,
        listeners: Iterable[Listener] = (),
    ):
        self.default = default.clone()
        self.name = self.default.name
        self.persistence = LayoutPersistence(store)
        self.breakpoints = breakpoints or Breakpoints.from_settings()
        self._listeners = list(listeners)

        raw = self.persistence.load(self.name)
        self._state, effects = initialize(self.default, raw, width, breakpoints=self.breakpoints)
        self._apply(effects)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def state(self) -> EngineState:
        return replace(self._state, config=self._state.config.clone())

    @property
    def version(self) -> int | float:
        return self._state.config.version

    @property
    def config(self) -> CustomizableLayoutConfig:
        return self._state.config.clone()

    @property
    def layout_type(self) -> LayoutType:
        return self._state.layout_type

    @property
    def layout(self) -> CustomizableLayout:
        """Connected copy of the current variant's layout."""

        return self._state.layout

    @property
    def template_columns(self) -> str:
        return mutator.template_columns(self._state.layout)

    @property
    def drag_delay(self) -> int:
        return drag_delay(self._state.layout_type)

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def dispatch(self, event: Event) -> CustomizableLayout:
        self._state, effects = handle_event(
            self._state, event, default=self.default, breakpoints=self.breakpoints
        )
        self._apply(effects)
        return self.layout

    def resize(self, width: Any) -> CustomizableLayout:
        return self.dispatch(ViewportResized(width=width))

    def drop(
        self,
        previous_container: str,
        container: str,
        previous_index: int,
        current_index: int,
        same_container: bool | None = None,
    ) -> CustomizableLayout:
        return self.dispatch(
            ItemDropped(previous_container, container, previous_index, current_index, same_container)
        )

    def add_column_left(self) -> CustomizableLayout:
        return self.dispatch(AddColumnLeft())

    def add_column_right(self) -> CustomizableLayout:
        return self.dispatch(AddColumnRight())

    def remove_column_left(self) -> CustomizableLayout:
        return self.dispatch(RemoveColumnLeft())

    def remove_column_right(self) -> CustomizableLayout:
        return self.dispatch(RemoveColumnRight())

    def reset(self) -> CustomizableLayout:
        return self.dispatch(ResetLayout())

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------
    def _apply(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, PersistConfig):
                self.persistence.save(self.name, effect.config)
            elif isinstance(effect, LayoutChanged):
                self._notify(effect)

    def _notify(self, effect: LayoutChanged) -> None:
        layout_changed.send(
            sender=self.__class__,
            name=self.name,
            layout_type=effect.layout_type,
            layout=effect.layout.clone(),
            template_columns=effect.template_columns,
            drag_delay=effect.drag_delay,
        )
        for listener in self._listeners:
            listener(effect)
