from __future__ import annotations

import json

from django.test import SimpleTestCase

from apps.customizable_layout.constants import LayoutType
from apps.customizable_layout.engine import LayoutEngine
from apps.customizable_layout.events import (
    AddColumnRight,
    EngineState,
    ItemDropped,
    LayoutChanged,
    PersistConfig,
    ResetLayout,
    ViewportResized,
    event_from_payload,
    handle_event,
    initialize,
)
from apps.customizable_layout.exceptions import ContainerNotFound, LayoutError, UnknownEvent
from apps.customizable_layout.layout_config import loads
from apps.customizable_layout.services.breakpoints import Breakpoints
from apps.customizable_layout.signals import layout_changed
from apps.customizable_layout.storage import MemoryStore
from apps.customizable_layout.tests.utils import column, make_config, names_by_container

BREAKPOINTS = Breakpoints(desktop=1024, tablet=990, mobile=420)


class FailingWriteStore(MemoryStore):
    def set(self, key, value):
        raise OSError("quota exceeded")


class LayoutEngineInitTests(SimpleTestCase):
    def test_first_run_adopts_copy_of_default(self) -> None:
        default = make_config(version=1, mobile=[column("A", "x")])
        store = MemoryStore()
        received = []

        engine = LayoutEngine(default, store, width=500, breakpoints=BREAKPOINTS, listeners=[received.append])

        self.assertEqual(engine.config, default)
        self.assertEqual(engine.layout.lists[0].connected_to, [])
        self.assertEqual(engine.layout_type, LayoutType.MOBILE)
        self.assertEqual(store.data, {})
        self.assertEqual(len(received), 1)
        self.assertEqual(received[0].layout, engine.layout)

    def test_stored_layout_is_reconciled_with_newer_default(self) -> None:
        store = MemoryStore()
        store.set("dashboard", json.dumps(make_config(version=1, mobile=[column("A", "x")]).to_dict()))
        default = make_config(version=2, mobile=[column("A", "x", "y")])

        engine = LayoutEngine(default, store, width=500, breakpoints=BREAKPOINTS)

        self.assertEqual(names_by_container(engine.layout), {"A": ["x", "y"]})
        self.assertEqual(engine.config.version, 1)

    def test_malformed_stored_layout_falls_back_to_default(self) -> None:
        store = MemoryStore({"dashboard": "{broken"})
        default = make_config(mobile=[column("A", "x")])

        with self.assertLogs("apps.customizable_layout.services.persistence", level="WARNING"):
            engine = LayoutEngine(default, store, breakpoints=BREAKPOINTS)

        self.assertEqual(engine.config, default)

    def test_wrongly_typed_stored_lists_fall_back_to_default(self) -> None:
        default = make_config(mobile=[column("A", "x")])
        cases = [
            {"connectedTo": 5},
            {"width": 7},
            {"connectedTo": ["A", 1]},
        ]
        for overrides in cases:
            with self.subTest(overrides=overrides):
                stored = {"name": "dashboard", "version": 1, "mobile": {"lists": [{**column("A", "x"), **overrides}]}}
                store = MemoryStore({"dashboard": json.dumps(stored)})

                with self.assertLogs("apps.customizable_layout", level="WARNING"):
                    engine = LayoutEngine(default, store, width=500, breakpoints=BREAKPOINTS)

                self.assertEqual(engine.config, default)
                self.assertEqual(engine.template_columns, "1fr")
                engine.drop("A", "A", 0, 0)
                self.assertEqual(loads(store.data["dashboard"]), default)

    def test_wide_viewport_selects_tablet_variant(self) -> None:
        default = make_config(mobile=[column("A", "x", "y")], tablet=[column("L", "x"), column("R", "y")])

        engine = LayoutEngine(default, MemoryStore(), width=1200, breakpoints=BREAKPOINTS)

        self.assertEqual(engine.layout_type, LayoutType.TABLET)
        self.assertEqual(names_by_container(engine.layout), {"L": ["x"], "R": ["y"]})
        self.assertEqual(engine.template_columns, "1fr 1fr")
        self.assertEqual(engine.drag_delay, 0)

    def test_missing_variant_uses_mobile_layout(self) -> None:
        default = make_config(mobile=[column("A", "x")])

        engine = LayoutEngine(default, MemoryStore(), width=1200, breakpoints=BREAKPOINTS)

        self.assertEqual(engine.layout_type, LayoutType.TABLET)
        self.assertEqual(names_by_container(engine.layout), {"A": ["x"]})


class LayoutEngineEventTests(SimpleTestCase):
    def setUp(self) -> None:
        self.default = make_config(
            version=1,
            mobile=[column("main", "a", "b", "c")],
            tablet=[column("left", "a", "b"), column("right", "c")],
        )
        self.store = MemoryStore()
        self.notifications: list[LayoutChanged] = []
        self.engine = LayoutEngine(
            self.default,
            self.store,
            width=500,
            breakpoints=BREAKPOINTS,
            listeners=[self.notifications.append],
        )
        self.notifications.clear()

    def stored(self):
        return loads(self.store.data["dashboard"])

    def test_drop_within_list_persists_and_notifies(self) -> None:
        layout = self.engine.drop("main", "main", 0, 2)

        self.assertEqual(layout.lists[0].component_names, ["b", "c", "a"])
        self.assertEqual(self.stored(), self.engine.config)
        self.assertEqual(len(self.notifications), 1)

    def test_drop_between_lists(self) -> None:
        self.engine.resize(1200)
        self.engine.drop("left", "right", 0, 1)

        self.assertEqual(names_by_container(self.engine.layout), {"left": ["b"], "right": ["c", "a"]})
        self.assertEqual(
            names_by_container(self.stored().get_layout(LayoutType.TABLET)),
            {"left": ["b"], "right": ["c", "a"]},
        )
        self.assertEqual(self.stored().get_layout(LayoutType.MOBILE).component_names, ["a", "b", "c"])

    def test_resize_switches_variant_without_persisting(self) -> None:
        self.engine.resize(1200)

        self.assertEqual(self.engine.layout_type, LayoutType.TABLET)
        self.assertEqual(self.store.data, {})
        self.assertEqual(len(self.notifications), 1)
        self.assertEqual(self.notifications[0].layout_type, LayoutType.TABLET)
        self.assertEqual(self.notifications[0].drag_delay, 0)

    def test_resize_within_same_variant_is_silent(self) -> None:
        self.engine.resize(600)
        self.assertEqual(self.notifications, [])

    def test_column_changes_apply_to_selected_variant(self) -> None:
        self.engine.resize(1200)
        self.engine.add_column_right()

        config = self.engine.config
        self.assertEqual(len(config.get_layout(LayoutType.TABLET).lists), 3)
        self.assertEqual(len(config.get_layout(LayoutType.MOBILE).lists), 1)

        self.engine.remove_column_left()
        self.assertEqual(
            self.engine.layout.lists[0].component_names,
            ["c", "a", "b"],
        )
        self.assertEqual(self.engine.template_columns, "1fr 1fr")

    def test_add_and_remove_column_left(self) -> None:
        self.engine.add_column_left()
        self.assertEqual(len(self.engine.layout.lists), 2)
        self.assertEqual(self.engine.layout.lists[1].connected_to, [self.engine.layout.lists[0].container_name])

        self.engine.remove_column_right()
        self.assertEqual(len(self.engine.layout.lists), 1)
        self.assertEqual(self.engine.layout.lists[0].component_names, ["a", "b", "c"])

    def test_reset_restores_default_variant(self) -> None:
        self.engine.drop("main", "main", 0, 2)
        self.engine.add_column_right()

        layout = self.engine.reset()

        self.assertEqual(names_by_container(layout), {"main": ["a", "b", "c"]})
        self.assertEqual(self.stored().get_layout(LayoutType.MOBILE), layout)

    def test_reset_drops_reconciled_customization(self) -> None:
        stored = make_config(version=1, mobile=[column("main", "c"), column("extra", "a", "b")])
        store = MemoryStore({"dashboard": json.dumps(stored.to_dict())})
        default = make_config(version=2, mobile=[column("main", "a", "b", "c", "d")])
        engine = LayoutEngine(default, store, width=300, breakpoints=BREAKPOINTS)
        self.assertEqual(names_by_container(engine.layout), {"main": ["d", "c"], "extra": ["a", "b"]})

        engine.reset()

        self.assertEqual(names_by_container(engine.layout), {"main": ["a", "b", "c", "d"]})

    def test_unknown_container_raises_and_keeps_state(self) -> None:
        before = self.engine.config
        with self.assertRaises(ContainerNotFound):
            self.engine.drop("main", "nowhere", 0, 0)
        self.assertEqual(self.engine.config, before)
        self.assertEqual(self.store.data, {})

    def test_returned_layout_is_a_copy(self) -> None:
        layout = self.engine.layout
        layout.lists[0].items.clear()
        self.assertEqual(self.engine.layout.lists[0].component_names, ["a", "b", "c"])

    def test_returned_state_is_a_copy(self) -> None:
        state = self.engine.state
        state.config.get_layout(LayoutType.MOBILE).lists[0].items.clear()
        self.assertEqual(self.engine.layout.lists[0].component_names, ["a", "b", "c"])
        self.assertEqual(self.engine.config, self.engine.state.config)
        self.assertEqual(self.engine.state.layout_type, LayoutType.MOBILE)
        self.assertEqual(self.engine.version, 1)

    def test_failed_write_keeps_in_memory_state(self) -> None:
        engine = LayoutEngine(self.default, FailingWriteStore(), width=500, breakpoints=BREAKPOINTS)
        with self.assertLogs("apps.customizable_layout.services.persistence", level="ERROR"):
            engine.drop("main", "main", 2, 0)
        self.assertEqual(engine.layout.lists[0].component_names, ["c", "a", "b"])

    def test_layout_changed_signal(self) -> None:
        calls = []

        def receiver(sender, **kwargs):
            calls.append(kwargs)

        layout_changed.connect(receiver)
        self.addCleanup(layout_changed.disconnect, receiver)

        self.engine.add_column_right()

        self.assertEqual(len(calls), 1)
        self.assertEqual(calls[0]["name"], "dashboard")
        self.assertEqual(calls[0]["layout_type"], LayoutType.MOBILE)
        self.assertEqual(calls[0]["layout"], self.engine.layout)
        self.assertEqual(calls[0]["template_columns"], "1fr 1fr")
        self.assertEqual(calls[0]["drag_delay"], 150)

    def test_component_uniqueness_across_events(self) -> None:
        self.engine.resize(1200)
        self.engine.add_column_left()
        new_column = self.engine.layout.container_names[0]
        self.engine.drop("left", new_column, 1, 0)
        self.engine.drop("right", "left", 0, 0)
        self.engine.remove_column_right()
        self.engine.resize(400)
        self.engine.drop("main", "main", 0, 1)

        for layout_type in (LayoutType.MOBILE, LayoutType.TABLET):
            names = self.engine.config.get_layout(layout_type).component_names
            self.assertEqual(sorted(names), ["a", "b", "c"])


class HandleEventTests(SimpleTestCase):
    def setUp(self) -> None:
        self.default = make_config(mobile=[column("A", "x"), column("B", "y")])
        self.state, effects = initialize(self.default, None, 320, breakpoints=BREAKPOINTS)
        self.initial_effects = effects

    def test_initialize_announces_layout(self) -> None:
        self.assertEqual(len(self.initial_effects), 1)
        effect = self.initial_effects[0]
        self.assertIsInstance(effect, LayoutChanged)
        self.assertEqual(effect.layout.lists[0].connected_to, ["B"])
        self.assertEqual(effect.template_columns, "1fr 1fr")
        self.assertEqual(effect.drag_delay, 150)

    def test_mutation_yields_persist_then_notify(self) -> None:
        state, effects = handle_event(
            self.state, ItemDropped("A", "B", 0, 0), default=self.default, breakpoints=BREAKPOINTS
        )

        self.assertEqual([type(effect) for effect in effects], [PersistConfig, LayoutChanged])
        self.assertIs(effects[0].config, state.config)
        self.assertEqual(names_by_container(state.layout), {"A": [], "B": ["x", "y"]})
        self.assertEqual(names_by_container(self.state.layout), {"A": ["x"], "B": ["y"]})

    def test_resize_changes_only_layout_type(self) -> None:
        state, effects = handle_event(
            self.state, ViewportResized(2000), default=self.default, breakpoints=BREAKPOINTS
        )
        self.assertEqual(state.layout_type, LayoutType.TABLET)
        self.assertIs(state.config, self.state.config)
        self.assertEqual([type(effect) for effect in effects], [LayoutChanged])

    def test_reset_and_column_events(self) -> None:
        state, _ = handle_event(self.state, AddColumnRight(), default=self.default, breakpoints=BREAKPOINTS)
        self.assertEqual(len(state.layout.lists), 3)
        state, _ = handle_event(state, ResetLayout(), default=self.default, breakpoints=BREAKPOINTS)
        self.assertEqual(state.layout.container_names, ["A", "B"])

    def test_unsupported_event_raises(self) -> None:
        with self.assertRaises(UnknownEvent):
            handle_event(self.state, object(), default=self.default)

    def test_same_container_flag_overrides_ids(self) -> None:
        event = ItemDropped("A", "A", 0, 0)
        self.assertTrue(event.is_same_container)
        self.assertFalse(ItemDropped("A", "A", 0, 0, same_container=False).is_same_container)
        self.assertTrue(ItemDropped("A", "B", 0, 0, same_container=True).is_same_container)

    def test_engine_state_falls_back_to_mobile(self) -> None:
        state = EngineState(config=self.default.clone(), layout_type=LayoutType.DESKTOP)
        self.assertEqual(state.effective_layout_type, LayoutType.MOBILE)


class EventFromPayloadTests(SimpleTestCase):
    def test_drop_payload(self) -> None:
        event = event_from_payload(
            {
                "type": "drop",
                "previousContainer": "A",
                "container": "B",
                "previousIndex": "1",
                "currentIndex": 0,
                "sameContainer": False,
            }
        )
        self.assertEqual(event, ItemDropped("A", "B", 1, 0, same_container=False))

    def test_simple_payloads(self) -> None:
        self.assertEqual(event_from_payload({"type": "resize", "width": 1200}), ViewportResized(1200))
        self.assertEqual(event_from_payload({"type": "reset"}), ResetLayout())
        self.assertEqual(event_from_payload({"type": "add_column_right"}), AddColumnRight())

    def test_unknown_type_raises(self) -> None:
        for payload in ({}, {"type": "explode"}, {"type": 5}, []):
            with self.subTest(payload=payload):
                with self.assertRaises(UnknownEvent):
                    event_from_payload(payload)

    def test_invalid_drop_fields_raise(self) -> None:
        base = {"type": "drop", "previousContainer": "A", "container": "B", "previousIndex": 0, "currentIndex": 0}
        for key, value in (("previousIndex", "first"), ("currentIndex", True), ("container", ""), ("previousContainer", None)):
            with self.subTest(key=key):
                with self.assertRaises(LayoutError):
                    event_from_payload({**base, key: value})
