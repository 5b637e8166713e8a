# device_query.py
from __future__ import annotations

import logging
from typing import List, Optional

from audio_system import AudioSystem, AudioSystemError
from models import AudioDevice, Direction


logger = logging.getLogger(__name__)


class DeviceQueryEngine:
    """
    Fresh snapshot on every call, nothing cached. Devices that cannot be read
    (typically half torn down during an unplug) are left out rather than
    failing the whole listing.
    """

    def __init__(self, system: AudioSystem) -> None:
        self._system = system

    def list_devices(self, direction: Direction) -> List[AudioDevice]:
        with self._system.snapshot():
            return self._list_devices(direction)

    def _list_devices(self, direction: Direction) -> List[AudioDevice]:
        try:
            ids = self._system.device_ids()
        except AudioSystemError as e:
            logger.warning("Listing %s devices failed: %s", direction.value, e)
            return []

        default_id = self._default_id(direction)

        out: List[AudioDevice] = []
        for device_id in ids:
            dev = self._build_device(device_id, direction, default_id)
            if dev is not None:
                out.append(dev)
        return out

    def _default_id(self, direction: Direction) -> Optional[int]:
        try:
            return self._system.default_device(direction)
        except AudioSystemError as e:
            logger.debug("No default %s device: %s", direction.value, e)
            return None

    def _build_device(self, device_id: int, direction: Direction, default_id: Optional[int]) -> Optional[AudioDevice]:
        try:
            name = self._system.device_name(device_id)
        except AudioSystemError as e:
            logger.debug("Dropping device %s: %s", device_id, e)
            return None

        has_in = self._has_streams(device_id, Direction.INPUT)
        has_out = self._has_streams(device_id, Direction.OUTPUT)

        if direction is Direction.INPUT and not has_in:
            return None
        if direction is Direction.OUTPUT and not has_out:
            return None

        return AudioDevice(
            id=device_id,
            name=name,
            supports_input=has_in,
            supports_output=has_out,
            is_default=(default_id is not None and device_id == default_id),
        )

    def _has_streams(self, device_id: int, direction: Direction) -> bool:
        try:
            return self._system.has_streams(device_id, direction)
        except AudioSystemError as e:
            logger.debug("Stream query for device %s (%s) failed: %s", device_id, direction.value, e)
            return False
