# tray.py
from __future__ import annotations

from typing import Callable, List, Optional

from PySide6.QtCore import QObject, Qt, QTimer, Signal
from PySide6.QtGui import QAction, QCursor, QIcon
from PySide6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from app_meta import APP_NAME
from menu_model import AUTOSTART_KEY, QUIT_KEY, MenuController
from models import MenuEntry


class MainThreadInvoker(QObject):
    """Runs posted callables on the thread this object lives on, one at a time."""

    invoke = Signal(object)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.invoke.connect(self._run, Qt.QueuedConnection)

    def _run(self, fn: Callable[[], None]) -> None:
        fn()

    def post(self, fn: Callable[[], None]) -> None:
        self.invoke.emit(fn)


class TrayApp(QObject):
    def __init__(self, controller: MenuController, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.controller = controller

        self.menu = QMenu()
        self._hide_menu: Optional[QMenu] = None

        self.tray = QSystemTrayIcon(self._icon(), self)
        self.tray.setToolTip(APP_NAME)
        self.tray.setContextMenu(self.menu)
        self.tray.activated.connect(self._on_activated)

    def _icon(self) -> QIcon:
        icon = QIcon.fromTheme("audio-volume-high")
        if icon.isNull():
            icon = QApplication.style().standardIcon(QStyle.SP_MediaVolume)
        return icon

    def start(self) -> None:
        self.rebuild_menu()
        self.tray.show()

        self.controller.directory.subscribe_to_changes(self.rebuild_menu)
        if self.controller.directory.bridge.degraded:
            self.tray.setToolTip(f"{APP_NAME} (auto refresh unavailable)")

    def _on_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.Trigger:
            self.menu.popup(QCursor.pos())

    def rebuild_menu(self) -> None:
        model = self.controller.refresh()

        if self._hide_menu is not None:
            self._hide_menu.deleteLater()
            self._hide_menu = None
        self.menu.clear()

        self._add_section("OUTPUT", model.outputs)
        if model.outputs and model.inputs:
            self.menu.addSeparator()
        self._add_section("MIC INPUT", model.inputs)

        self.menu.addSeparator()

        self._hide_menu = self.menu.addMenu("Hide devices")
        for e in model.hide:
            self._add_entry(self._hide_menu, e.display, e.key, checked=e.checked)
        self._hide_menu.setEnabled(bool(model.hide))

        self.menu.addSeparator()
        self._add_entry(self.menu, "Launch at Login", AUTOSTART_KEY, checked=self.controller.autostart.is_enabled())
        self._add_entry(self.menu, "Quit", QUIT_KEY)

    def _add_section(self, title: str, entries: List[MenuEntry]) -> None:
        if not entries:
            return
        header = self.menu.addAction(title)
        header.setEnabled(False)
        for e in entries:
            self._add_entry(self.menu, e.display, e.key, checked=e.checked)

    def _add_entry(self, menu: QMenu, text: str, key: str, checked: Optional[bool] = None) -> QAction:
        act = menu.addAction(text.replace("&", "&&"))
        act.setData(key)
        if checked is not None:
            act.setCheckable(True)
            act.setChecked(checked)
        act.triggered.connect(lambda _checked=False, k=key: self._activate(k))
        return act

    def _activate(self, key: str) -> None:
        if self.controller.activate(key):
            QApplication.quit()
            return
        # The rebuild deletes the action that is still emitting.
        QTimer.singleShot(0, self.rebuild_menu)
