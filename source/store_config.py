# store_config.py
from __future__ import annotations

import configparser
import json
import os
import platform
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence


DEFAULT_CONFIG_TEXT = """\
[Devices]
hidden = []

[App]
last_exe_path =
"""


def _windows_appdata_dir() -> Path:
    appdata = os.environ.get("APPDATA")
    if appdata:
        return Path(appdata)
    return Path.home() / "AppData" / "Roaming"


def _linux_xdg_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def user_config_root() -> Path:
    sysname = (platform.system() or "").lower()
    if sysname.startswith("windows"):
        return _windows_appdata_dir()
    if sysname.startswith("linux"):
        return _linux_xdg_config_dir()
    return Path.home() / ".config"


def user_config_dir(app_name: str) -> Path:
    return user_config_root() / app_name


def detect_executable_path() -> str:
    """
    I record the path used to launch the app.
    """
    try:
        p = Path(sys.argv[0]).expanduser()
        if not p.is_absolute():
            p = (Path.cwd() / p).resolve()
        else:
            p = p.resolve()
        return str(p)
    except OSError:
        return ""


def decode_names(raw: str) -> List[str]:
    raw = (raw or "").strip()
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError:
        return []
    if not isinstance(data, list):
        return []
    return [str(x) for x in data if isinstance(x, str) and x]


def encode_names(names: Sequence[str]) -> str:
    return json.dumps(sorted(set(names)), ensure_ascii=False)


@dataclass(frozen=True)
class ConfigStore:
    app_name: str = "aSwitch"
    filename: str = "aswitch.cfg"

    @property
    def dir_path(self) -> Path:
        return user_config_dir(self.app_name)

    @property
    def file_path(self) -> Path:
        return self.dir_path / self.filename

    def ensure_exists(self) -> None:
        self.dir_path.mkdir(parents=True, exist_ok=True)
        if not self.file_path.exists():
            self.file_path.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")

    def load(self) -> configparser.ConfigParser:
        self.ensure_exists()
        # Interpolation would choke on "%" in device names.
        cfg = configparser.ConfigParser(interpolation=None)
        cfg.read(self.file_path, encoding="utf-8")

        if not cfg.has_section("Devices"):
            cfg.add_section("Devices")
        cfg.set("Devices", "hidden", cfg.get("Devices", "hidden", fallback="[]"))

        if not cfg.has_section("App"):
            cfg.add_section("App")
        cfg.set("App", "last_exe_path", cfg.get("App", "last_exe_path", fallback=""))

        return cfg

    def save(self, cfg: configparser.ConfigParser) -> None:
        self.ensure_exists()
        with self.file_path.open("w", encoding="utf-8") as f:
            cfg.write(f)

    def hidden_names(self) -> List[str]:
        return decode_names(self.load().get("Devices", "hidden", fallback="[]"))

    def set_hidden_names(self, names: Sequence[str]) -> None:
        cfg = self.load()
        cfg.set("Devices", "hidden", encode_names(names))
        self.save(cfg)

    def last_exe_path(self) -> str:
        return self.load().get("App", "last_exe_path", fallback="").strip()

    def record_last_exe_path(self) -> None:
        cfg = self.load()
        p = detect_executable_path().strip()
        if not p:
            return
        if cfg.get("App", "last_exe_path", fallback="").strip() != p:
            cfg.set("App", "last_exe_path", p)
            self.save(cfg)
