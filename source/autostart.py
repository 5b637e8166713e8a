# autostart.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from app_meta import APP_ID, APP_NAME
from store_config import user_config_root


logger = logging.getLogger(__name__)


def quote_exec_arg(arg: str) -> str:
    """Double-quoted Exec= argument; a literal % is written as %%."""
    escaped = "".join("\\" + c if c in "\"`$\\" else c for c in arg)
    return "\"" + escaped.replace("%", "%%") + "\""


def desktop_entry_text(exec_path: str) -> str:
    return (
        "[Desktop Entry]\n"
        "Type=Application\n"
        f"Name={APP_NAME}\n"
        "Comment=Switch the default audio input and output device\n"
        f"Exec={quote_exec_arg(exec_path)}\n"
        "Icon=audio-volume-high\n"
        "Terminal=false\n"
        "X-GNOME-Autostart-enabled=true\n"
    )


@dataclass(frozen=True)
class Autostart:
    """Launch at login through an XDG autostart entry."""

    exec_path: str
    filename: str = f"{APP_ID}.desktop"

    @property
    def file_path(self) -> Path:
        return user_config_root() / "autostart" / self.filename

    def is_enabled(self) -> bool:
        return self.file_path.exists()

    def set_enabled(self, enabled: bool) -> bool:
        try:
            if enabled:
                if not self.exec_path:
                    logger.warning("Cannot enable launch at login: executable path is unknown")
                    return False
                self.file_path.parent.mkdir(parents=True, exist_ok=True)
                self.file_path.write_text(desktop_entry_text(self.exec_path), encoding="utf-8")
            elif self.file_path.exists():
                self.file_path.unlink()
        except OSError as e:
            logger.warning("Failed to %s launch at login: %s", "enable" if enabled else "disable", e)
            return False
        return True

    def toggle(self) -> bool:
        self.set_enabled(not self.is_enabled())
        return self.is_enabled()
