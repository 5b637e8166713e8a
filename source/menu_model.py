# menu_model.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List, Optional

from autostart import Autostart
from directory import AudioDeviceDirectory
from hidden_set import HiddenSet, all_known_names, visible
from models import AudioDevice, Direction, MenuEntry


logger = logging.getLogger(__name__)


def device_key(direction: Direction, device: AudioDevice) -> str:
    return f"{direction.value}:{device.id}"


def hide_key(name: str) -> str:
    return f"hide:{name}"


@dataclass
class MenuModel:
    outputs: List[MenuEntry] = field(default_factory=list)
    inputs: List[MenuEntry] = field(default_factory=list)
    hide: List[MenuEntry] = field(default_factory=list)
    _by_key: Dict[str, MenuEntry] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        for e in self.outputs + self.inputs + self.hide:
            self._by_key[e.key] = e

    def entry(self, key: Optional[str]) -> Optional[MenuEntry]:
        if not key:
            return None
        return self._by_key.get(key)


def _device_entries(direction: Direction, devices: List[AudioDevice]) -> List[MenuEntry]:
    return [
        MenuEntry(
            key=device_key(direction, d),
            display=d.name,
            checked=d.is_default,
            direction=direction,
            device=d,
        )
        for d in devices
    ]


def build_menu_model(directory: AudioDeviceDirectory, hidden_names: AbstractSet[str]) -> MenuModel:
    outputs = directory.list_devices(Direction.OUTPUT)
    inputs = directory.list_devices(Direction.INPUT)

    return MenuModel(
        outputs=_device_entries(Direction.OUTPUT, visible(outputs, hidden_names)),
        inputs=_device_entries(Direction.INPUT, visible(inputs, hidden_names)),
        hide=[
            MenuEntry(key=hide_key(name), display=name, checked=name in hidden_names)
            for name in all_known_names(outputs, inputs)
        ],
    )


AUTOSTART_KEY = "app:autostart"
QUIT_KEY = "app:quit"


class MenuController:
    """
    Qt-free half of the tray: owns the current MenuModel and turns a
    triggered entry key back into the action it stands for.
    """

    def __init__(self, directory: AudioDeviceDirectory, hidden: HiddenSet, autostart: Autostart) -> None:
        self.directory = directory
        self.hidden = hidden
        self.autostart = autostart
        self.model = MenuModel()

    def refresh(self) -> MenuModel:
        self.model = build_menu_model(self.directory, self.hidden.names)
        return self.model

    def activate(self, key: str) -> bool:
        """Performs the action behind `key`. Returns True when the app should quit."""
        if key == QUIT_KEY:
            return True
        if key == AUTOSTART_KEY:
            self.autostart.toggle()
            return False

        entry = self.model.entry(key)
        if entry is None:
            logger.debug("Ignoring stale menu entry %s", key)
            return False

        if entry.device is not None and entry.direction is not None:
            self.directory.set_default(entry.direction, entry.device.id)
        else:
            self.hidden.toggle(entry.display)
        return False
