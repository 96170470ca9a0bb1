"""Worker→display status channel."""

from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Optional, Protocol

from luxmark_validation.models.status import Track, ValidationStatus


class StatusSubscriber(Protocol):
    def on_scene_status(self, label: str, ok: bool) -> None: ...

    def on_image_status(self, label: str, ok: bool) -> None: ...


class StatusChannel:
    """Thread-safe FIFO of status events.

    Producers never wait on the consumer; the consumer drains on its own
    schedule. Events from one producer come out in publication order.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: Deque[ValidationStatus] = deque()
        self._latest: dict[Track, ValidationStatus] = {}

    def publish(self, status: ValidationStatus) -> None:
        with self._lock:
            self._items.append(status)
            self._latest[status.track] = status

    def drain(self) -> list[ValidationStatus]:
        with self._lock:
            if not self._items:
                return []
            items = list(self._items)
            self._items.clear()
            return items

    def latest(self, track: Track) -> Optional[ValidationStatus]:
        with self._lock:
            return self._latest.get(track)

    def dispatch(self, subscriber: StatusSubscriber) -> int:
        """Deliver pending events to ``subscriber``; returns how many."""
        items = self.drain()
        for status in items:
            if status.track is Track.SCENE:
                subscriber.on_scene_status(status.label, status.ok)
            else:
                subscriber.on_image_status(status.label, status.ok)
        return len(items)
