# models.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class Direction(Enum):
    INPUT = "input"
    OUTPUT = "output"


class ChangeEvent(Enum):
    DEVICES = "devices"
    DEFAULT_OUTPUT = "default-output"
    DEFAULT_INPUT = "default-input"


@dataclass(frozen=True)
class AudioNode:
    id: int
    name: str
    description: str
    media_class: str
    props: Dict[str, str]


@dataclass(frozen=True)
class AudioDevice:
    id: int
    name: str
    supports_input: bool
    supports_output: bool
    is_default: bool


@dataclass(frozen=True)
class MenuEntry:
    key: str       # "output:<id>" | "input:<id>" | "hide:<name>"
    display: str
    checked: bool
    direction: Optional[Direction] = None
    device: Optional[AudioDevice] = None
