# pw_types.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from models import AudioNode


@dataclass(frozen=True)
class PwPort:
    id: int
    node_id: int
    direction: str  # "in" | "out" | ""
    monitor: bool


@dataclass
class PwGraph:
    nodes: Dict[int, AudioNode]
    ports: Dict[int, PwPort]
    defaults: Dict[str, str] = field(default_factory=dict)  # "default.audio.sink" -> node.name
