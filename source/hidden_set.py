# hidden_set.py
from __future__ import annotations

import logging
import threading
from typing import AbstractSet, FrozenSet, Iterable, List, Protocol, Sequence

from models import AudioDevice
from store_config import ConfigStore


logger = logging.getLogger(__name__)


def visible(devices: Sequence[AudioDevice], hidden_names: AbstractSet[str]) -> List[AudioDevice]:
    return [d for d in devices if d.name not in hidden_names]


def all_known_names(outputs: Iterable[AudioDevice], inputs: Iterable[AudioDevice]) -> List[str]:
    names = {d.name for d in outputs}
    names.update(d.name for d in inputs)
    return sorted(names)


def toggle_name(hidden: AbstractSet[str], name: str) -> FrozenSet[str]:
    if name in hidden:
        return frozenset(n for n in hidden if n != name)
    return frozenset(hidden) | {name}


class HiddenSetStore(Protocol):
    def load(self) -> List[str]: ...

    def save(self, names: Sequence[str]) -> None: ...


class MemoryHiddenSetStore:
    def __init__(self, names: Iterable[str] = ()) -> None:
        self.names: List[str] = list(names)
        self.saves = 0

    def load(self) -> List[str]:
        return list(self.names)

    def save(self, names: Sequence[str]) -> None:
        self.names = list(names)
        self.saves += 1


class ConfigHiddenSetStore:
    def __init__(self, store: ConfigStore) -> None:
        self._store = store

    def load(self) -> List[str]:
        return self._store.hidden_names()

    def save(self, names: Sequence[str]) -> None:
        self._store.set_hidden_names(names)


class HiddenSet:
    """
    Device names the user chose to hide. Names, not ids, so the choice
    survives replugs and restarts; two devices sharing a name hide together.

    Every mutation is written through to the store before returning.
    """

    def __init__(self, store: HiddenSetStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._names: FrozenSet[str] = frozenset(store.load())

    @property
    def names(self) -> FrozenSet[str]:
        return self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def toggle(self, name: str) -> bool:
        """Hide `name` if visible, unhide it otherwise. Returns True if now hidden."""
        with self._lock:
            self._commit(toggle_name(self._names, name))
            hidden = name in self._names
        logger.info("%s device %r", "Hid" if hidden else "Unhid", name)
        return hidden

    def _commit(self, names: FrozenSet[str]) -> None:
        self._store.save(sorted(names))
        self._names = names
