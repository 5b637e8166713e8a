# pulse_events.py
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from audio_system import AudioSystemError
from models import ChangeEvent


logger = logging.getLogger(__name__)

Callback = Callable[[], None]


def connect_pulse(client_name: str) -> Any:
    # libpulse is loaded on first connection, not on import.
    import pulse_client

    return pulse_client.connect(client_name)


class PulseEventListener:
    """
    Owns one pulse connection dedicated to waiting for events, run on a
    daemon thread. Pulse events are translated into ChangeEvent classes:

      - sink/source "new" or "remove"  -> DEVICES
      - server "change"                -> DEFAULT_OUTPUT and/or DEFAULT_INPUT,
                                          whichever default name actually moved

    Listener callbacks run on the listener thread.
    """

    def __init__(
        self,
        client_name: str = "aswitch-events",
        pulse_factory: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self._client_name = client_name
        self._pulse_factory = pulse_factory or connect_pulse
        self._lock = threading.Lock()
        self._listeners: Dict[ChangeEvent, List[Callback]] = {}
        self._pulse: Optional[Any] = None
        self._thread: Optional[threading.Thread] = None
        self._closing = threading.Event()
        self._default_sink = ""
        self._default_source = ""

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def add_listener(self, event: ChangeEvent, callback: Callback) -> None:
        with self._lock:
            self._ensure_running()
            self._listeners.setdefault(event, []).append(callback)

    def _ensure_running(self) -> None:
        if self._closing.is_set():
            raise AudioSystemError("Event listener is closed.")
        if self._thread is not None:
            return

        pulse = self._pulse_factory(self._client_name)
        try:
            pulse.subscribe("sink", "source", "server")
            self._remember_defaults(pulse.server_info())
        except AudioSystemError:
            pulse.close()
            raise

        self._pulse = pulse
        self._thread = threading.Thread(target=self._run, name="pulse-events", daemon=True)
        self._thread.start()
        logger.debug("Pulse event listener started")

    def _remember_defaults(self, info: Any) -> None:
        self._default_sink = getattr(info, "default_sink_name", "") or ""
        self._default_source = getattr(info, "default_source_name", "") or ""

    def _run(self) -> None:
        pulse = self._pulse
        while not self._closing.is_set():
            try:
                events = pulse.wait_events()
            except AudioSystemError as e:
                if not self._closing.is_set():
                    logger.warning("Pulse event loop stopped, devices will no longer refresh: %s", e)
                break

            if events and not self._closing.is_set():
                self.handle_events(pulse, events)

    def handle_events(self, pulse: Any, events: List[Any]) -> None:
        for ev in events:
            facility, kind = ev.facility, ev.t
            if facility in ("sink", "source"):
                if kind in ("new", "remove"):
                    self._fire(ChangeEvent.DEVICES)
            elif facility == "server":
                self._handle_server_change(pulse)

    def _handle_server_change(self, pulse: Any) -> None:
        old_sink, old_source = self._default_sink, self._default_source
        try:
            self._remember_defaults(pulse.server_info())
        except AudioSystemError as e:
            logger.debug("server_info after server event failed: %s", e)
            self._fire(ChangeEvent.DEFAULT_OUTPUT)
            self._fire(ChangeEvent.DEFAULT_INPUT)
            return

        if self._default_sink != old_sink:
            self._fire(ChangeEvent.DEFAULT_OUTPUT)
        if self._default_source != old_source:
            self._fire(ChangeEvent.DEFAULT_INPUT)

    def _fire(self, event: ChangeEvent) -> None:
        with self._lock:
            callbacks = list(self._listeners.get(event, ()))
        logger.debug("Change event %s -> %d listener(s)", event.value, len(callbacks))
        for cb in callbacks:
            try:
                cb()
            except Exception:
                logger.exception("Listener for %s failed", event.value)

    def close(self) -> None:
        self._closing.set()
        pulse, thread = self._pulse, self._thread
        if pulse is None:
            return
        pulse.stop_waiting()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)
        self._thread = None
        pulse.close()
        self._pulse = None
