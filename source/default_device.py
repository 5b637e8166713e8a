# default_device.py
from __future__ import annotations

import logging

from audio_system import AudioSystem, AudioSystemError
from models import Direction


logger = logging.getLogger(__name__)


class DefaultDeviceController:
    def __init__(self, system: AudioSystem) -> None:
        self._system = system

    def set_default(self, direction: Direction, device_id: int) -> bool:
        """
        One write request, no retry. True only means the request was accepted;
        the new default shows up on a later query, if at all.
        """
        try:
            self._system.set_default_device(direction, device_id)
        except AudioSystemError as e:
            logger.warning("Could not make device %s the default %s: %s", device_id, direction.value, e)
            return False
        logger.info("Requested device %s as default %s", device_id, direction.value)
        return True
