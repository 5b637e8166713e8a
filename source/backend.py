# backend.py
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional

from audio_system import AudioSystem, AudioSystemError
from models import ChangeEvent, Direction
from pulse_events import PulseEventListener, connect_pulse
from pw_dump import dump_graph
from pw_graph import (
    default_key,
    device_node_ids,
    find_node_by_name,
    media_class_supports,
    node_has_ports,
    port_direction_for,
    select_ports,
)
from pw_types import PwGraph


logger = logging.getLogger(__name__)


class PipeWireBackend(AudioSystem):
    """
    Reads devices from a pw-dump snapshot and talks to pipewire-pulse for
    everything that writes or listens. device_ids() takes a fresh snapshot;
    the per-device reads that follow use that same snapshot.

    Inside snapshot() no other thread can replace the snapshot, so a whole
    listing reads one graph even while change callbacks re-query.
    """

    def __init__(
        self,
        pulse_client_name: str = "aswitch",
        listener: Optional[PulseEventListener] = None,
        pulse_factory: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self._pulse_client_name = pulse_client_name
        self._pulse_factory = pulse_factory or connect_pulse
        self._pulse: Optional[Any] = None
        self._lock = threading.RLock()
        self._graph: PwGraph = PwGraph(nodes={}, ports={})
        self._listener = listener or PulseEventListener(f"{pulse_client_name}-events", self._pulse_factory)

    @contextmanager
    def snapshot(self) -> Iterator[None]:
        with self._lock:
            yield

    def refresh(self) -> None:
        graph = dump_graph()
        with self._lock:
            self._graph = graph

    def _pulse_connect(self) -> Any:
        if self._pulse is None:
            self._pulse = self._pulse_factory(self._pulse_client_name)
        return self._pulse

    def _drop_pulse(self) -> None:
        if self._pulse is not None:
            self._pulse.close()
        self._pulse = None

    def close(self) -> None:
        self._listener.close()
        with self._lock:
            self._drop_pulse()

    def device_ids(self) -> List[int]:
        with self._lock:
            self.refresh()
            return device_node_ids(self._graph)

    def default_device(self, direction: Direction) -> Optional[int]:
        with self._lock:
            name = self._graph.defaults.get(default_key(direction))
            if not name:
                return None
            node = find_node_by_name(self._graph, name)
            return node.id if node is not None else None

    def device_name(self, device_id: int) -> str:
        with self._lock:
            node = self._graph.nodes.get(device_id)
        if node is None:
            raise AudioSystemError(f"Device {device_id} is no longer present.")
        if not node.description:
            raise AudioSystemError(f"Device {device_id} has no readable name.")
        return node.description

    def has_streams(self, device_id: int, direction: Direction) -> bool:
        with self._lock:
            graph = self._graph
        node = graph.nodes.get(device_id)
        if node is None:
            raise AudioSystemError(f"Device {device_id} is no longer present.")
        if not node_has_ports(graph, device_id):
            # Suspended ALSA nodes may not expose ports yet.
            return media_class_supports(node, direction)
        return bool(select_ports(graph, device_id, port_direction_for(direction)))

    def set_default_device(self, direction: Direction, device_id: int) -> None:
        with self._lock:
            self.refresh()
            node = self._graph.nodes.get(device_id)
            if node is None or not node.name:
                raise AudioSystemError(f"Device {device_id} is no longer present.")

            try:
                self._pulse_connect().set_default(direction, node.name)
            except AudioSystemError:
                # A failed connection is not reused.
                self._drop_pulse()
                raise

    def add_listener(self, event: ChangeEvent, callback: Callable[[], None]) -> None:
        self._listener.add_listener(event, callback)
