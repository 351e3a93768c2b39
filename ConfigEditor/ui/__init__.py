"""
UI package: the PySide6 application shell.

Modules:

- :mod:`ConfigEditor.ui.actions` – Application-wide Qt signals.
- :mod:`ConfigEditor.ui.app` – The QApplication subclass.
- :mod:`ConfigEditor.ui.main` – The main window wiring the preset list, editor, and toolbar.
"""
