"""
ConfigEditor: desktop editor for named JSON configuration presets.

This package provides:

- :mod:`ConfigEditor.core` – JSON documents, the file-system layer, and the editor session commands.
- :mod:`ConfigEditor.presets` – The ordered preset store and its Qt list model and views.
- :mod:`ConfigEditor.settings` – Application paths, the target-path settings record and the persistence gateway.
- :mod:`ConfigEditor.editor` – The JSON text editor widget.
- :mod:`ConfigEditor.ui` – The PySide6 application shell.
- :mod:`ConfigEditor.log` – In-app logging with a log viewer.

Use :func:`ConfigEditor.exec_` to launch the application.
"""

import sys

# Fail on Python < 3.11
if not (sys.version_info.major == 3 and sys.version_info.minor >= 11):
    raise RuntimeError('ConfigEditor requires Python 3.11 or higher.')

__version__ = '0.1.0'
__license__ = 'GPL-3.0'
__description__ = 'ConfigEditor: desktop editor for named JSON configuration presets.'


def exec_() -> None:
    """Launch the ConfigEditor GUI application and enter its event loop.

    Sets up logging, creates the QApplication, loads the session from disk and
    shows the main window.
    """
    from .log import log
    log.setup_logging()

    from .ui import app
    from .ui import main
    from .core.session import EditorSession
    from .settings.lib import PersistenceGateway

    application = app.Application(sys.argv)

    session = EditorSession.load(PersistenceGateway())
    main.show(session)

    sys.exit(application.exec())


if __name__ == '__main__':
    exec_()
