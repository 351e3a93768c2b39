"""
Settings package: application paths, the settings record and the persistence gateway.

This package provides:

- :mod:`ConfigEditor.settings.lib` – ConfigPaths, SettingsRecord and PersistenceGateway.
"""
