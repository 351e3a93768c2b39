"""Custom QApplication for ConfigEditor."""
import sys
from typing import Optional, Sequence

from PySide6 import QtWidgets

from .. import __version__


class Application(QtWidgets.QApplication):
    """QApplication configuring application metadata."""

    def __init__(self, argv: Optional[Sequence[str]] = None) -> None:
        if argv is None:
            argv = sys.argv

        super().__init__(list(argv))

        from ..settings import lib
        self.setApplicationName(lib.app_name)
        self.setOrganizationName('')
        self.setApplicationVersion(__version__)
        self.setQuitOnLastWindowClosed(True)
