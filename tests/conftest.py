"""Pytest fixtures and fakes shared by the unit tests."""

from typing import Callable, Dict, List, Optional, Set, Tuple

import pytest

from audio_system import AudioSystem, AudioSystemError
from directory import AudioDeviceDirectory
from hidden_set import HiddenSet, MemoryHiddenSetStore
from models import ChangeEvent, Direction


class FakeAudioSystem(AudioSystem):
    """Scriptable stand-in for the OS audio subsystem."""

    def __init__(self) -> None:
        self.devices: Dict[int, Tuple[str, bool, bool]] = {}
        self.defaults: Dict[Direction, Optional[int]] = {Direction.OUTPUT: None, Direction.INPUT: None}
        self.unreadable: Set[int] = set()
        self.fail_enumeration = False
        self.refused_events: Set[ChangeEvent] = set()
        self.rejected_writes: Set[int] = set()
        self.listeners: Dict[ChangeEvent, List[Callable[[], None]]] = {}
        self.set_calls: List[Tuple[Direction, int]] = []
        self.closed = False

    def add(self, device_id: int, name: str, out: bool = False, inp: bool = False) -> None:
        self.devices[device_id] = (name, inp, out)

    def remove(self, device_id: int) -> None:
        self.devices.pop(device_id, None)
        for d, cur in self.defaults.items():
            if cur == device_id:
                self.defaults[d] = None

    def device_ids(self) -> List[int]:
        if self.fail_enumeration:
            raise AudioSystemError("enumeration failed")
        return list(self.devices)

    def default_device(self, direction: Direction) -> Optional[int]:
        return self.defaults[direction]

    def device_name(self, device_id: int) -> str:
        if device_id in self.unreadable or device_id not in self.devices:
            raise AudioSystemError(f"no name for {device_id}")
        return self.devices[device_id][0]

    def has_streams(self, device_id: int, direction: Direction) -> bool:
        if device_id not in self.devices:
            raise AudioSystemError(f"{device_id} is gone")
        _name, inp, out = self.devices[device_id]
        return inp if direction is Direction.INPUT else out

    def set_default_device(self, direction: Direction, device_id: int) -> None:
        self.set_calls.append((direction, device_id))
        if device_id not in self.devices or device_id in self.rejected_writes:
            raise AudioSystemError(f"cannot set {device_id}")
        self.defaults[direction] = device_id

    def add_listener(self, event: ChangeEvent, callback: Callable[[], None]) -> None:
        if event in self.refused_events:
            raise AudioSystemError(f"subscription to {event.value} refused")
        self.listeners.setdefault(event, []).append(callback)

    def fire(self, event: ChangeEvent) -> None:
        for cb in list(self.listeners.get(event, [])):
            cb()

    def listener_count(self) -> int:
        return sum(len(v) for v in self.listeners.values())

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def system():
    return FakeAudioSystem()


@pytest.fixture
def scenario_system():
    """Built-in (duplex, default output) plus an output-only USB DAC."""
    s = FakeAudioSystem()
    s.add(1, "Built-in", out=True, inp=True)
    s.add(2, "USB DAC", out=True, inp=False)
    s.defaults[Direction.OUTPUT] = 1
    return s


@pytest.fixture
def directory(scenario_system):
    return AudioDeviceDirectory(scenario_system)


@pytest.fixture
def memory_store():
    return MemoryHiddenSetStore()


@pytest.fixture
def hidden(memory_store):
    return HiddenSet(memory_store)


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    """Point the XDG config root at a temporary directory."""
    monkeypatch.setattr("platform.system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path
