"""Load and save layout configs through a key-value store."""

from __future__ import annotations

import json
import logging
from typing import Any

from apps.customizable_layout.layout_config import CustomizableLayoutConfig, dumps
from apps.customizable_layout.storage import KeyValueStore

log = logging.getLogger(__name__)


class LayoutPersistence:
    """Read/write a config stored under its layout name.

    Storage is best-effort: read problems are reported as "nothing stored"
    and write problems are logged, leaving the caller's in-memory state as
    the source of truth.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self, name: str) -> Any | None:
        """Return the decoded JSON stored under ``name`` or ``None``."""

        try:
            raw = self.store.get(name)
        except Exception:
            log.exception("Failed to read stored layout %s", name)
            return None

        if raw in {None, "", b""}:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            log.warning("Stored layout %s is not valid JSON: %s", name, exc)
            return None

    def save(self, name: str, config: CustomizableLayoutConfig) -> bool:
        try:
            self.store.set(name, dumps(config))
        except Exception:
            log.exception("Failed to persist layout %s", name)
            return False
        return True
