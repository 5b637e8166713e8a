# directory.py
from __future__ import annotations

from typing import List, Optional

from audio_system import AudioSystem
from change_bridge import Callback, ChangeNotificationBridge, Deliver
from default_device import DefaultDeviceController
from device_query import DeviceQueryEngine
from hidden_set import all_known_names, visible
from models import AudioDevice, Direction


class AudioDeviceDirectory:
    """The surface the tray consumes: query, switch, watch, filter."""

    visible = staticmethod(visible)
    all_known_names = staticmethod(all_known_names)

    def __init__(self, system: AudioSystem, deliver: Optional[Deliver] = None) -> None:
        self.system = system
        self.query = DeviceQueryEngine(system)
        self.controller = DefaultDeviceController(system)
        self.bridge = ChangeNotificationBridge(system, deliver=deliver)

    def list_devices(self, direction: Direction) -> List[AudioDevice]:
        return self.query.list_devices(direction)

    def set_default(self, direction: Direction, device_id: int) -> bool:
        return self.controller.set_default(direction, device_id)

    def subscribe_to_changes(self, callback: Callback) -> None:
        self.bridge.start(callback)

    def close(self) -> None:
        self.system.close()
