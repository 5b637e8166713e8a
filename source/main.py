# main.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from app_meta import APP_NAME, detect_version
from autostart import Autostart
from backend import PipeWireBackend
from directory import AudioDeviceDirectory
from hidden_set import ConfigHiddenSetStore, HiddenSet
from models import Direction
from store_config import ConfigStore


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def print_devices(directory: AudioDeviceDirectory, hidden: HiddenSet) -> None:
    for direction in (Direction.OUTPUT, Direction.INPUT):
        print(f"=== {direction.value.upper()} ===")
        for d in directory.list_devices(direction):
            mark = "*" if d.is_default else " "
            flags = "hidden" if d.name in hidden else ""
            print(f"{mark} [{d.id:4d}] {d.name}  {flags}".rstrip())


def cmd_list(store: ConfigStore) -> int:
    directory = AudioDeviceDirectory(PipeWireBackend())
    try:
        print_devices(directory, HiddenSet(ConfigHiddenSetStore(store)))
    finally:
        directory.close()
    return 0


def cmd_tray(store: ConfigStore) -> int:
    from PySide6.QtWidgets import QApplication, QSystemTrayIcon

    from menu_model import MenuController
    from tray import MainThreadInvoker, TrayApp

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setQuitOnLastWindowClosed(False)

    if not QSystemTrayIcon.isSystemTrayAvailable():
        logger.error("No system tray available, %s cannot run", APP_NAME)
        return 1

    invoker = MainThreadInvoker()
    directory = AudioDeviceDirectory(PipeWireBackend(), deliver=invoker.post)
    hidden = HiddenSet(ConfigHiddenSetStore(store))
    autostart = Autostart(exec_path=store.last_exe_path())

    tray = TrayApp(MenuController(directory, hidden, autostart))
    app.aboutToQuit.connect(directory.close)
    tray.start()

    return app.exec()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="aswitch", description=f"{APP_NAME} audio device switcher")
    parser.add_argument("--list", action="store_true", help="Print output and input devices, then exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {detect_version()}")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    store = ConfigStore()
    if args.list:
        return cmd_list(store)

    store.record_last_exe_path()
    return cmd_tray(store)


if __name__ == "__main__":
    sys.exit(main())
