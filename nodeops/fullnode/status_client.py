"""Serialised status updates of full node resources."""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable
from typing import Any, Protocol


class StatusReaderWriter(Protocol):
    def get(self, key: Hashable) -> Any: ...

    def update_status(self, obj: Any) -> None: ...


class StatusClient:
    """Serialises status updates per object key.

    Several controllers update a full node's status; holding one lock per key
    keeps them from overwriting each other's fields.
    """

    def __init__(self, client: StatusReaderWriter) -> None:
        self._client = client
        self._locks: dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(key, threading.Lock())

    def sync_update(self, key: Hashable, update: Callable[[Any], None]) -> None:
        """Fetch the object, apply update to its status, and write the status back."""
        with self._lock_for(key):
            crd = self._client.get(key)
            update(crd.status)
            self._client.update_status(crd)