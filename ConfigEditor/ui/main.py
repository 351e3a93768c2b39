"""Main window composition and UI entry point for ConfigEditor.

This module defines:
    - show(): create and display the main window for a session
    - MainWindow: toolbar for the target config file, preset dock, JSON editor and log dock
"""
import logging
from typing import Optional

from PySide6 import QtWidgets, QtCore, QtGui

from ..core import filesystem
from ..editor.json_widget import JSONWidget
from ..log.view import LogDockWidget
from ..presets.view import PresetsDockWidget
from ..settings.lib import app_name
from .actions import signals

widget = None

STATUS_TIMEOUT = 8000


def show(session) -> 'MainWindow':
    global widget

    if widget is None:
        widget = MainWindow(session)

    widget.show()
    return widget


class MainWindow(QtWidgets.QMainWindow):
    """Top-level window. Holds a reference to the process's editor session."""

    def __init__(self, session, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ConfigEditorMainWindow')
        self.setWindowTitle(app_name)
        self.resize(960, 640)

        self._session = session

        self.toolbar: QtWidgets.QToolBar
        self.target_label: QtWidgets.QLabel
        self.editor: JSONWidget
        self.presets_dock: PresetsDockWidget
        self.log_dock: LogDockWidget

        self._create_ui()
        self._init_actions()
        self._connect_signals()
        self.update_target_label()

    def _create_ui(self) -> None:
        self.toolbar = QtWidgets.QToolBar('Config File', self)
        self.toolbar.setObjectName('ConfigEditorToolbar')
        self.toolbar.setMovable(False)
        self.addToolBar(self.toolbar)

        self.editor = JSONWidget(self._session, parent=self)
        self.setCentralWidget(self.editor)

        self.presets_dock = PresetsDockWidget(self._session, parent=self)
        self.addDockWidget(QtCore.Qt.LeftDockWidgetArea, self.presets_dock)

        self.log_dock = LogDockWidget(parent=self)
        self.addDockWidget(QtCore.Qt.BottomDockWidgetArea, self.log_dock)
        self.log_dock.hide()

        self.setStatusBar(QtWidgets.QStatusBar(self))

    def _init_actions(self) -> None:
        @QtCore.Slot()
        def select_target() -> None:
            paths = filesystem.open_file_dialog(self, 'Select Config File')
            if not paths:
                return
            self._session.set_target_path(paths[0])

        action = QtGui.QAction('📁 Select config file', self)
        action.setShortcut('Ctrl+O')
        action.setStatusTip('Choose the config file presets are applied to')
        action.triggered.connect(select_target)
        self.toolbar.addAction(action)

        self.target_label = QtWidgets.QLabel(self.toolbar)
        self.target_label.setContentsMargins(8, 0, 8, 0)
        self.toolbar.addWidget(self.target_label)

        spacer = QtWidgets.QWidget(self.toolbar)
        spacer.setSizePolicy(QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Preferred)
        self.toolbar.addWidget(spacer)

        action = QtGui.QAction('Logs', self)
        action.setShortcut('Ctrl+L')
        action.triggered.connect(self.log_dock.show_logs)
        self.toolbar.addAction(action)

    def _connect_signals(self) -> None:
        self._session.settings.settingsChanged.connect(self.update_target_label)
        self._session.settings.settingsChanged.connect(self.editor.update_state)

        signals.error.connect(self.show_message)
        signals.warning.connect(self.show_message)

    @QtCore.Slot(str)
    def show_message(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_TIMEOUT)

    @QtCore.Slot()
    def update_target_label(self) -> None:
        path = self._session.target_path
        if path:
            self.target_label.setText(path)
            self.target_label.setToolTip(path)
        else:
            self.target_label.setText('No config file selected')
            self.target_label.setToolTip('')
        logging.debug(f'Target config file: {path}')
