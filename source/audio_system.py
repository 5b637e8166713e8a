# audio_system.py
from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from models import ChangeEvent, Direction


class AudioSystemError(RuntimeError):
    pass


class AudioSystem(ABC):
    """
    The OS calls the device directory is built on. Every method may raise
    AudioSystemError; nothing else is expected to escape.
    """

    @contextmanager
    def snapshot(self) -> Iterator[None]:
        """Calls made inside the block all observe the same device set."""
        yield

    @abstractmethod
    def device_ids(self) -> List[int]: ...

    @abstractmethod
    def default_device(self, direction: Direction) -> Optional[int]: ...

    @abstractmethod
    def device_name(self, device_id: int) -> str: ...

    @abstractmethod
    def has_streams(self, device_id: int, direction: Direction) -> bool: ...

    @abstractmethod
    def set_default_device(self, direction: Direction, device_id: int) -> None: ...

    @abstractmethod
    def add_listener(self, event: ChangeEvent, callback: Callable[[], None]) -> None: ...

    def close(self) -> None:
        pass
