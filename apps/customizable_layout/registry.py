"""Registry of default layout configs, keyed by layout name."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from .exceptions import InvalidLayoutConfig, UnknownLayout
from .layout_config import CustomizableLayoutConfig, is_valid_config

log = logging.getLogger(__name__)


class DefaultLayoutRegistry:
    def __init__(self) -> None:
        self._defaults: Dict[str, CustomizableLayoutConfig] = {}

    def register(self, config: CustomizableLayoutConfig | Mapping[str, Any]) -> CustomizableLayoutConfig:
        """Register (or replace) the default config for ``config.name``.

        Accepts a config instance or its JSON-shaped dict. A stored copy is
        kept so later changes by the caller do not leak in.
        """

        if not isinstance(config, CustomizableLayoutConfig):
            config = CustomizableLayoutConfig.from_dict(config)
        elif not is_valid_config(config):
            raise InvalidLayoutConfig(f"Default layout {config.name!r} is not a valid config")

        previous = self._defaults.get(config.name)
        if previous is not None and previous.version > config.version:
            log.warning(
                "Replacing default layout %s v%s with older v%s",
                config.name,
                previous.version,
                config.version,
            )
        self._defaults[config.name] = config.clone()
        return config

    def unregister(self, name: str) -> None:
        self._defaults.pop(name, None)

    def get(self, name: str) -> CustomizableLayoutConfig:
        try:
            return self._defaults[name].clone()
        except KeyError:
            raise UnknownLayout(name) from None

    def all(self) -> Dict[str, CustomizableLayoutConfig]:
        return {name: config.clone() for name, config in self._defaults.items()}

    def clear(self) -> None:
        self._defaults.clear()


default_layouts = DefaultLayoutRegistry()
