"""Application-wide Qt signals for ConfigEditor.

This module provides:
    - Signals: custom Qt signals for error and warning reporting and UI actions (showLogs).
    - signals: the process-wide instance.
"""
import logging

from PySide6 import QtCore


class Signals(QtCore.QObject):
    """Centralized Qt signals for status reporting and UI events."""
    showLogs = QtCore.Signal()

    error = QtCore.Signal(str)
    warning = QtCore.Signal(str)

    def __init__(self):
        super().__init__()
        self._connect_signals()

    def _connect_signals(self):
        @QtCore.Slot(str)
        def warning_reported(message: str) -> None:
            logging.debug(f'Warning reported to the UI: {message}')

        self.warning.connect(warning_reported)


signals = Signals()
