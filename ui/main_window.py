"""Main window for the opener UI."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine, Optional

from PySide6 import QtCore, QtGui, QtWidgets

from opener.apps import APP_LABELS, ExternalApp
from opener.errors import PersistenceError
from opener.models import APP_TITLE
from opener.service import ExternalActions
from ui.tasks import TaskRunner

LOGGER = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, actions: ExternalActions) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(640, 200)

        self.actions = actions
        self.tasks = TaskRunner()

        self.apply_light_style()

        # ----- Path -----
        self.path_edit = QtWidgets.QLineEdit()
        self.path_edit.setPlaceholderText("Path to open (drop a file or folder here)")

        browse_btn = QtWidgets.QToolButton()
        browse_btn.setText("Browse")
        browse_menu = QtWidgets.QMenu(browse_btn)
        browse_menu.addAction("File...", self.browse_file)
        browse_menu.addAction("Folder...", self.browse_folder)
        browse_btn.setMenu(browse_menu)
        browse_btn.setPopupMode(QtWidgets.QToolButton.InstantPopup)

        self.line_spin = QtWidgets.QSpinBox()
        self.line_spin.setRange(0, 1_000_000)
        self.line_spin.setSpecialValueText("line")

        # ----- Application -----
        self.app_combo = QtWidgets.QComboBox()
        for app, label in APP_LABELS.items():
            self.app_combo.addItem(label, app.value)
        self.restore_last_used()

        open_btn = QtWidgets.QPushButton("Open")
        open_btn.setDefault(True)
        open_btn.clicked.connect(self.on_open)
        editor_btn = QtWidgets.QPushButton("Open in Editor")
        editor_btn.clicked.connect(self.on_open_in_editor)
        reveal_btn = QtWidgets.QPushButton("Reveal")
        reveal_btn.clicked.connect(self.on_reveal)
        copy_btn = QtWidgets.QPushButton("Copy Path")
        copy_btn.clicked.connect(self.on_copy)

        central = QtWidgets.QWidget()
        form = QtWidgets.QVBoxLayout(central)
        form.setContentsMargins(16, 16, 16, 16)
        form.setSpacing(10)

        path_row = QtWidgets.QHBoxLayout()
        path_row.addWidget(self.path_edit, 1)
        path_row.addWidget(self.line_spin, 0)
        path_row.addWidget(browse_btn, 0)
        form.addLayout(path_row)

        button_row = QtWidgets.QHBoxLayout()
        button_row.addWidget(self.app_combo, 1)
        button_row.addWidget(open_btn)
        button_row.addWidget(editor_btn)
        button_row.addStretch(1)
        button_row.addWidget(reveal_btn)
        button_row.addWidget(copy_btn)
        form.addLayout(button_row)

        self.setCentralWidget(central)
        self.setAcceptDrops(True)

    def apply_light_style(self) -> None:
        QtWidgets.QApplication.setStyle("Fusion")
        QtWidgets.QApplication.instance().setPalette(QtWidgets.QApplication.style().standardPalette())
        self.setStyleSheet(
            """
            QLineEdit { padding: 8px; border-radius: 10px; }
            QComboBox { padding: 6px; }
            QPushButton, QToolButton { padding: 6px 12px; border-radius: 8px; }
            """
        )

    def select_app(self, app: ExternalApp) -> None:
        index = self.app_combo.findData(app.value)
        if index >= 0:
            self.app_combo.setCurrentIndex(index)

    def current_app(self) -> ExternalApp:
        return ExternalApp(self.app_combo.currentData())

    def current_path(self) -> str:
        return self.path_edit.text().strip()

    def current_line(self):
        value = self.line_spin.value()
        return value or None

    def browse_file(self) -> None:
        path, _ = QtWidgets.QFileDialog.getOpenFileName(self, APP_TITLE)
        if path:
            self.path_edit.setText(path)

    def browse_folder(self) -> None:
        path = QtWidgets.QFileDialog.getExistingDirectory(self, APP_TITLE)
        if path:
            self.path_edit.setText(path)

    def dragEnterEvent(self, ev: QtGui.QDragEnterEvent) -> None:
        if ev.mimeData().hasUrls():
            ev.acceptProposedAction()
        else:
            super().dragEnterEvent(ev)

    def dropEvent(self, ev: QtGui.QDropEvent) -> None:
        for u in ev.mimeData().urls():
            p = u.toLocalFile()
            if p:
                self.path_edit.setText(p)
                break
        ev.acceptProposedAction()

    def report_error(self, exc: BaseException) -> None:
        LOGGER.error("Open failed: %s", exc)
        QtWidgets.QMessageBox.warning(self, APP_TITLE, f"Could not open: {exc}")

    def restore_last_used(self) -> None:
        try:
            self.select_app(self.actions.preferences.get_last_used())
        except PersistenceError as exc:
            LOGGER.error("Preferences unreadable: %s", exc)
            QtWidgets.QMessageBox.warning(
                self, APP_TITLE, f"Saved preferences could not be read and will be replaced: {exc}"
            )

    def run_action(
        self, coro: Coroutine[Any, Any, None], on_success: Optional[Callable[[], None]] = None
    ) -> None:
        QtWidgets.QApplication.setOverrideCursor(QtCore.Qt.BusyCursor)

        def finished(exc: Optional[BaseException]) -> None:
            QtWidgets.QApplication.restoreOverrideCursor()
            if isinstance(exc, asyncio.CancelledError):
                return
            if exc is not None:
                self.report_error(exc)
            elif on_success is not None:
                on_success()

        self.tasks.run(coro, finished)

    def on_open(self) -> None:
        path = self.current_path()
        if not path:
            return
        self.run_action(self.actions.open_in_app(path, self.current_app()))

    def on_open_in_editor(self) -> None:
        path = self.current_path()
        if not path:
            return
        self.run_action(
            self.actions.open_file_in_editor(path, line=self.current_line()),
            on_success=self.restore_last_used,
        )

    def on_reveal(self) -> None:
        path = self.current_path()
        if path:
            self.actions.open_in_finder(path)

    def on_copy(self) -> None:
        path = self.current_path()
        if path:
            self.actions.copy_path(path)
            self.statusBar().showMessage("Path copied", 2000)
