# pulse_client.py
from __future__ import annotations

from typing import Any, List

import pulsectl

from audio_system import AudioSystemError
from models import Direction


class PulseClient:
    """
    One pulsectl connection to pipewire-pulse. pulsectl errors leave this
    class as AudioSystemError; the rest of the app never imports pulsectl.

    pulsectl forbids calls on the connection from inside the event callback,
    so the callback only queues the event and stops the loop. wait_events()
    hands the queue over once event_listen() returns.
    """

    def __init__(self, client_name: str) -> None:
        try:
            self._pulse = pulsectl.Pulse(client_name)
        except pulsectl.PulseError as e:
            raise AudioSystemError(f"Cannot connect to pipewire-pulse: {e}") from e
        self._pending: List[Any] = []

    def server_info(self) -> Any:
        try:
            return self._pulse.server_info()
        except pulsectl.PulseError as e:
            raise AudioSystemError(f"server_info failed: {e}") from e

    def set_default(self, direction: Direction, name: str) -> None:
        try:
            if direction is Direction.INPUT:
                self._pulse.source_default_set(name)
            else:
                self._pulse.sink_default_set(name)
        except pulsectl.PulseError as e:
            raise AudioSystemError(f"Setting default {direction.value} to {name} failed: {e}") from e

    def subscribe(self, *masks: str) -> None:
        try:
            self._pulse.event_mask_set(*masks)
            self._pulse.event_callback_set(self._on_event)
        except pulsectl.PulseError as e:
            raise AudioSystemError(f"Cannot subscribe to pipewire-pulse events: {e}") from e

    def _on_event(self, ev: Any) -> None:
        self._pending.append(ev)
        raise pulsectl.PulseLoopStop

    def wait_events(self) -> List[Any]:
        """Blocks until events arrive or stop_waiting() is called from another thread."""
        try:
            self._pulse.event_listen()
        except pulsectl.PulseError as e:
            raise AudioSystemError(f"Event loop failed: {e}") from e
        events, self._pending = self._pending, []
        return events

    def stop_waiting(self) -> None:
        self._pulse.event_listen_stop()

    def close(self) -> None:
        self._pulse.close()


def connect(client_name: str) -> PulseClient:
    return PulseClient(client_name)
