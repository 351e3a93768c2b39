"""Dock widget showing the in-memory log tank."""
import logging

from PySide6 import QtCore, QtWidgets

from . import log
from ..ui.actions import signals


class LogDockWidget(QtWidgets.QDockWidget):
    """Read-only view of records collected by :class:`~ConfigEditor.log.log.TankHandler`."""

    def __init__(self, parent=None):
        super().__init__('Logs', parent=parent)
        self.setObjectName('ConfigEditorLogWidget')

        self.text_edit = None
        self.level_combo = None

        self._create_ui()
        self._connect_signals()

    def _create_ui(self):
        content = QtWidgets.QWidget(self)
        QtWidgets.QVBoxLayout(content)

        self.level_combo = QtWidgets.QComboBox(content)
        for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR):
            self.level_combo.addItem(logging.getLevelName(level), level)
        self.level_combo.setCurrentIndex(1)
        content.layout().addWidget(self.level_combo)

        self.text_edit = QtWidgets.QPlainTextEdit(content)
        self.text_edit.setReadOnly(True)
        self.text_edit.setLineWrapMode(QtWidgets.QPlainTextEdit.NoWrap)
        content.layout().addWidget(self.text_edit, 1)

        self.setWidget(content)

    def _connect_signals(self):
        self.level_combo.currentIndexChanged.connect(self.refresh)
        signals.showLogs.connect(self.show_logs)
        self.visibilityChanged.connect(self.refresh)

    @QtCore.Slot()
    def refresh(self, *args) -> None:
        handler = log.get_handler()
        if handler is None:
            self.text_edit.setPlainText('')
            return
        level = self.level_combo.currentData()
        self.text_edit.setPlainText('\n'.join(handler.get_logs(level)))
        self.text_edit.verticalScrollBar().setValue(self.text_edit.verticalScrollBar().maximum())

    @QtCore.Slot()
    def show_logs(self) -> None:
        self.show()
        self.raise_()
        self.refresh()
