"""
Logging subsystem: handlers and a viewer for application logging.

Modules:

- :mod:`ConfigEditor.log.log` – Log handler integrating with Python logging and Qt messages.
- :mod:`ConfigEditor.log.view` – Dock widget rendering the in-memory log tank.
"""
