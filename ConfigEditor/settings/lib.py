"""Settings library for the editor's own files.

Provides:
    - ConfigPaths: resolution of the application data directory and file paths.
    - SettingsRecord: the target config path, persisted separately from presets.
    - PersistenceGateway: load/save of presets and settings, publishing and export.
"""

import json
import logging
import pathlib
from typing import Any, Dict, Mapping, Optional, Union

from PySide6 import QtCore

from ..core import filesystem
from ..core.document import Document, INDENT
from ..status import status

app_name: str = 'ConfigEditor'

PRESETS_FILENAME: str = 'app_config.json'
SETTINGS_FILENAME: str = 'editor_settings.json'

TARGET_PATH_KEY: str = 'targetPath'


def to_json_text(data: Any) -> str:
    """Serialize data as pretty-printed JSON with a trailing newline."""
    return json.dumps(data, indent=INDENT, ensure_ascii=False, allow_nan=False) + '\n'


class ConfigPaths:
    """Resolve the application data directory and the two well-known files in it.

    Args:
        data_dir: Directory to use instead of the platform's application data location.
    """

    def __init__(self, data_dir: Optional[Union[str, pathlib.Path]] = None) -> None:
        if data_dir is None:
            QtCore.QCoreApplication.setApplicationName(app_name)
            QtCore.QCoreApplication.setOrganizationName('')
            p = QtCore.QStandardPaths.writableLocation(QtCore.QStandardPaths.AppDataLocation)
            data_dir = pathlib.Path(p)
        logging.debug(f'Using app data directory: {data_dir}')

        self.data_dir: pathlib.Path = pathlib.Path(data_dir)
        self.presets_path: pathlib.Path = self.data_dir / PRESETS_FILENAME
        self.settings_path: pathlib.Path = self.data_dir / SETTINGS_FILENAME

    def __repr__(self) -> str:
        return f'<ConfigPaths data_dir={self.data_dir!s}>'


class SettingsRecord(QtCore.QObject):
    """Holds the path of the external config file presets are published to."""

    settingsChanged = QtCore.Signal()

    def __init__(self, target_path: Optional[str] = None,
                 parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent)
        self._target_path: Optional[str] = target_path or None

    @property
    def target_path(self) -> Optional[str]:
        return self._target_path

    def get_target_path(self) -> Optional[str]:
        return self._target_path

    def set_target_path(self, path: Optional[Union[str, pathlib.Path]]) -> None:
        """Overwrite the target path and request persistence.

        The path is not checked for writability; that happens when publishing.
        """
        self._target_path = str(path) if path and str(path).strip() else None
        logging.debug(f'Target path set to: {self._target_path}')
        self.settingsChanged.emit()

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {TARGET_PATH_KEY: self._target_path}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SettingsRecord':
        value = data.get(TARGET_PATH_KEY)
        if value is not None and not isinstance(value, str):
            logging.warning(f'Ignoring "{TARGET_PATH_KEY}", expected a string, got {type(value)}.')
            value = None
        return cls(value)


class PersistenceGateway:
    """Reads and writes the presets file, the settings file, and user-chosen files.

    Loads fail soft: a missing or unreadable file yields an empty result and a warning.
    Writes raise a :class:`status.FileIOError` subclass.
    """

    def __init__(self, paths: Optional[ConfigPaths] = None) -> None:
        self.paths: ConfigPaths = paths or ConfigPaths()

    def _load_object(self, path: pathlib.Path) -> Optional[Dict[str, Any]]:
        if not filesystem.exists(path):
            logging.warning(f'File not found, using defaults: {path}')
            return None
        try:
            data = json.loads(filesystem.read_text(path))
        except (OSError, ValueError) as ex:
            logging.warning(f'Could not read "{path}", using defaults: {ex}')
            return None
        if not isinstance(data, dict):
            logging.warning(f'Expected a JSON object in "{path}", got {type(data).__name__}.')
            return None
        return data

    def load_presets(self) -> Dict[str, Document]:
        """Read the presets file.

        Returns:
            Preset name to document, in file order. Empty on any failure.
        """
        path = self.paths.presets_path
        logging.debug(f'Loading presets from "{path}"')
        data = self._load_object(path)
        if data is None:
            return {}
        try:
            return {k: Document(v) for k, v in data.items()}
        except status.InvalidShapeException as ex:
            logging.warning(f'Invalid presets in "{path}": {ex}')
            return {}

    def save_presets(self, store) -> None:
        """Write the store to the presets file, creating the data directory if needed.

        Args:
            store: A :class:`~ConfigEditor.presets.lib.PresetStore`.

        Raises:
            status.PresetsWriteException: If the file cannot be written.
        """
        path = self.paths.presets_path
        logging.debug(f'Saving {len(store)} presets to "{path}"')
        try:
            filesystem.create_dir(self.paths.data_dir)
            filesystem.write_text(path, to_json_text(store.to_document().data))
        except (OSError, UnicodeEncodeError) as ex:
            raise status.PresetsWriteException(f'{path}: {ex}') from ex

    def load_settings(self) -> SettingsRecord:
        """Read the settings file. A missing or corrupt file yields an empty record."""
        path = self.paths.settings_path
        logging.debug(f'Loading editor settings from "{path}"')
        data = self._load_object(path)
        if data is None:
            return SettingsRecord()
        return SettingsRecord.from_dict(data)

    def save_settings(self, record: SettingsRecord) -> None:
        """Write the settings record, creating the data directory if needed.

        Raises:
            status.SettingsWriteException: If the file cannot be written.
        """
        path = self.paths.settings_path
        logging.debug(f'Saving editor settings to "{path}"')
        try:
            filesystem.create_dir(self.paths.data_dir)
            filesystem.write_text(path, to_json_text(record.to_dict()))
        except (OSError, UnicodeEncodeError) as ex:
            raise status.SettingsWriteException(f'{path}: {ex}') from ex

    def publish_to_target(self, path: Optional[Union[str, pathlib.Path]], document: Document) -> pathlib.Path:
        """Overwrite the target config file with document.

        The target is owned by another application, so its directory is never created.

        Returns:
            The path written.

        Raises:
            status.TargetWriteException: If path is unset, its directory is missing, or the write fails.
        """
        if not path or not str(path).strip():
            raise status.TargetWriteException('No target path is set.')
        path = pathlib.Path(path)
        if not path.parent.is_dir():
            raise status.TargetWriteException(f'Directory does not exist: {path.parent}')
        try:
            filesystem.write_text(path, to_json_text(Document(document).data))
        except (OSError, UnicodeEncodeError) as ex:
            raise status.TargetWriteException(f'{path}: {ex}') from ex
        logging.info(f'Published preset to "{path}"')
        return path

    def export_presets(self, path: Union[str, pathlib.Path], store) -> pathlib.Path:
        """Write the whole store to a user-chosen file.

        Raises:
            status.ExportWriteException: If the directory is missing or the write fails.
        """
        path = pathlib.Path(path)
        if not path.parent.is_dir():
            raise status.ExportWriteException(f'Directory does not exist: {path.parent}')
        try:
            filesystem.write_text(path, to_json_text(store.to_document().data))
        except (OSError, UnicodeEncodeError) as ex:
            raise status.ExportWriteException(f'{path}: {ex}') from ex
        logging.info(f'Exported {len(store)} presets to "{path}"')
        return path

    def read_document(self, path: Union[str, pathlib.Path]) -> Document:
        """Read and parse a user-chosen JSON file.

        Raises:
            status.FileReadException: If the file cannot be read.
            status.InvalidJsonException: If the content is not valid JSON.
        """
        try:
            text = filesystem.read_text(path)
        except (OSError, UnicodeDecodeError) as ex:
            raise status.FileReadException(f'{path}: {ex}') from ex
        return Document.from_text(text)
