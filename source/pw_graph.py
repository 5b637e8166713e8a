# pw_graph.py
from __future__ import annotations

from typing import List, Optional

from models import AudioNode, Direction
from pw_dump import DEFAULT_SINK_KEY, DEFAULT_SOURCE_KEY
from pw_types import PwGraph, PwPort


DEVICE_MEDIA_CLASSES = ("Audio/Sink", "Audio/Source", "Audio/Source/Virtual", "Audio/Duplex")


def is_device_node(n: AudioNode) -> bool:
    return n.media_class in DEVICE_MEDIA_CLASSES


def is_monitor_node(n: AudioNode) -> bool:
    return n.name.endswith(".monitor") or n.props.get("node.name", "").endswith(".monitor")


def default_key(direction: Direction) -> str:
    return DEFAULT_SOURCE_KEY if direction is Direction.INPUT else DEFAULT_SINK_KEY


def port_direction_for(direction: Direction) -> str:
    # An output device consumes audio on its "in" ports; an input device produces it on "out".
    return "out" if direction is Direction.INPUT else "in"


def select_ports(graph: PwGraph, node_id: int, direction: str) -> List[PwPort]:
    ps = [p for p in graph.ports.values() if p.node_id == node_id and p.direction == direction and not p.monitor]
    return sorted(ps, key=lambda x: x.id)


def node_has_ports(graph: PwGraph, node_id: int) -> bool:
    return any(p.node_id == node_id for p in graph.ports.values())


def media_class_supports(n: AudioNode, direction: Direction) -> bool:
    mc = n.media_class
    if mc == "Audio/Duplex":
        return True
    if direction is Direction.OUTPUT:
        return mc == "Audio/Sink"
    return mc.startswith("Audio/Source")


def find_node_by_name(graph: PwGraph, name: str) -> Optional[AudioNode]:
    for n in graph.nodes.values():
        if n.name == name:
            return n
    return None


def device_node_ids(graph: PwGraph) -> List[int]:
    return [n.id for n in graph.nodes.values() if is_device_node(n) and not is_monitor_node(n)]
