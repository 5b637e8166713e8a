# change_bridge.py
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Tuple

from audio_system import AudioSystem, AudioSystemError
from models import ChangeEvent


logger = logging.getLogger(__name__)

Callback = Callable[[], None]
Deliver = Callable[[Callback], None]

WATCHED_EVENTS: Tuple[ChangeEvent, ...] = (
    ChangeEvent.DEVICES,
    ChangeEvent.DEFAULT_OUTPUT,
    ChangeEvent.DEFAULT_INPUT,
)


class _SerializedDeliver:
    def __init__(self) -> None:
        self._lock = threading.Lock()

    def __call__(self, fn: Callback) -> None:
        with self._lock:
            fn()


class ChangeNotificationBridge:
    """
    Unregistered -> Registered, once per process. Every watched event maps to
    the same payload-free callback; bursts are passed through as they come.

    `deliver` decides where the callback runs. It must never run two
    callbacks at the same time; the default one calls inline under a lock,
    the tray passes a Qt main-thread invoker.
    """

    def __init__(self, system: AudioSystem, deliver: Optional[Deliver] = None) -> None:
        self._system = system
        self._deliver: Deliver = deliver or _SerializedDeliver()
        self._lock = threading.Lock()
        self._registered = False
        self._failed: Tuple[ChangeEvent, ...] = ()

    @property
    def registered(self) -> bool:
        return self._registered

    @property
    def failed_events(self) -> Tuple[ChangeEvent, ...]:
        return self._failed

    @property
    def degraded(self) -> bool:
        return bool(self._failed)

    def start(self, on_change: Callback) -> None:
        with self._lock:
            if self._registered:
                return
            self._registered = True

        def forward() -> None:
            self._deliver(on_change)

        failed = []
        for event in WATCHED_EVENTS:
            try:
                self._system.add_listener(event, forward)
            except AudioSystemError as e:
                logger.warning("Failed to watch %s changes, menu will not auto refresh: %s", event.value, e)
                failed.append(event)
        self._failed = tuple(failed)
