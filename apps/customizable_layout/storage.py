"""Key-value stores the layout engine persists through.

A store maps a layout name to the JSON text of its config. Stores used by
the HTTP views are built per user via ``for_user``; the backend is chosen by
``CUSTOMIZABLE_LAYOUT_STORE``.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Protocol

from django.core.cache import caches
from django.utils.module_loading import import_string

from .conf import settings

log = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


def _user_key(user: Any) -> str:
    if user is None or not getattr(user, "is_authenticated", False):
        return "anonymous"
    return str(user.pk)


class MemoryStore:
    """Process-local store for tests and previews.

    A store built directly owns its own dict. Stores built through
    :meth:`for_user` share one dict per user so that consecutive requests
    see each other's writes; at most
    ``CUSTOMIZABLE_LAYOUT_MEMORY_MAX_NAMESPACES`` users are kept, least
    recently used first out. Nothing survives a restart and nothing is
    shared between worker processes.
    """

    _namespaces: "OrderedDict[str, dict[str, str]]" = OrderedDict()
    _lock = threading.Lock()

    def __init__(self, data: dict[str, str] | None = None, namespace: str | None = None):
        self.data = {} if data is None else data
        self.namespace = namespace

    @classmethod
    def for_user(cls, user: Any) -> "MemoryStore":
        namespace = _user_key(user)
        limit = max(1, int(settings.CUSTOMIZABLE_LAYOUT_MEMORY_MAX_NAMESPACES))
        with cls._lock:
            data = cls._namespaces.pop(namespace, None)
            if data is None:
                data = {}
            cls._namespaces[namespace] = data
            while len(cls._namespaces) > limit:
                evicted, _ = cls._namespaces.popitem(last=False)
                log.debug("Evicted in-memory layouts for %s", evicted)
        return cls(data, namespace=namespace)

    @classmethod
    def clear(cls) -> None:
        with cls._lock:
            cls._namespaces.clear()

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class CacheStore:
    """Store backed by a Django cache alias; entries never expire."""

    prefix = "customizable_layout"

    def __init__(self, namespace: str = "anonymous", alias: str | None = None):
        self.namespace = namespace
        self.alias = alias or settings.CUSTOMIZABLE_LAYOUT_CACHE_ALIAS

    @classmethod
    def for_user(cls, user: Any) -> "CacheStore":
        return cls(namespace=_user_key(user))

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{self.namespace}:{key}"

    def get(self, key: str) -> str | None:
        return caches[self.alias].get(self._key(key))

    def set(self, key: str, value: str) -> None:
        caches[self.alias].set(self._key(key), value, timeout=None)


class DatabaseStore:
    """Store keeping one :class:`StoredLayout` row per owner and name."""

    def __init__(self, owner: Any):
        self.owner = owner

    @classmethod
    def for_user(cls, user: Any) -> "DatabaseStore":
        return cls(owner=user)

    def get(self, key: str) -> str | None:
        from .models import StoredLayout

        return (
            StoredLayout.objects.filter(owner=self.owner, name=key)
            .values_list("payload", flat=True)
            .first()
        )

    def set(self, key: str, value: str) -> None:
        from .models import StoredLayout

        StoredLayout.objects.update_or_create(
            owner=self.owner,
            name=key,
            defaults={"payload": value},
        )


def get_store(user: Any) -> KeyValueStore:
    """Instantiate the configured store for ``user``."""

    store_class = import_string(settings.CUSTOMIZABLE_LAYOUT_STORE)
    return store_class.for_user(user)
