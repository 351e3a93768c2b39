"""Editor session: the commands the UI shell invokes.

The session owns one :class:`~ConfigEditor.presets.lib.PresetStore` and one
:class:`~ConfigEditor.settings.lib.SettingsRecord` and tracks which preset
is selected, the raw text being edited for it, and which preset is being
renamed. Every store or settings mutation is written through to disk by the
:class:`~ConfigEditor.settings.lib.PersistenceGateway`; a failed write is
reported as a warning and the in-memory state is kept.
"""
import enum
import logging
import pathlib
from typing import Iterable, List, Optional, Union

from PySide6 import QtCore

from .document import Document
from ..presets.lib import DEFAULT_PRESET_NAME, PresetStore
from ..settings.lib import PersistenceGateway, SettingsRecord
from ..status import status
from ..ui.actions import signals


class SessionState(enum.Enum):
    NoSelection = enum.auto()
    Selected = enum.auto()
    Editing = enum.auto()


class EditorSession(QtCore.QObject):
    """Stateful command surface over the preset store and the settings record."""

    # Selected preset name, or '' when nothing is selected
    selectionChanged = QtCore.Signal(str)
    # Draft text replaced by the session (not by the user typing)
    draftReset = QtCore.Signal(str)

    def __init__(
            self,
            store: PresetStore,
            settings: SettingsRecord,
            gateway: PersistenceGateway,
            parent: Optional[QtCore.QObject] = None
    ) -> None:
        super().__init__(parent)
        self.store = store
        self.settings = settings
        self.gateway = gateway

        self._selected_name: Optional[str] = None
        self._draft_text: str = ''
        self._editing_name: Optional[str] = None
        self._dirty: bool = False

        self._connect_signals()

    @classmethod
    def load(cls, gateway: PersistenceGateway, parent: Optional[QtCore.QObject] = None) -> 'EditorSession':
        """Read the settings and presets files and return a ready session."""
        settings = gateway.load_settings()
        store = PresetStore(gateway.load_presets())
        logging.debug(f'Loaded {len(store)} presets, target path: {settings.target_path}')
        return cls(store, settings, gateway, parent=parent)

    def _connect_signals(self) -> None:
        self.store.presetsChanged.connect(self._save_presets)
        self.settings.settingsChanged.connect(self._save_settings)

    @QtCore.Slot()
    def _save_presets(self) -> None:
        try:
            self.gateway.save_presets(self.store)
        except status.PresetsWriteException as ex:
            logging.warning(f'Presets are kept in memory only: {ex}')
            signals.warning.emit(str(ex))

    @QtCore.Slot()
    def _save_settings(self) -> None:
        try:
            self.gateway.save_settings(self.settings)
        except status.SettingsWriteException as ex:
            logging.warning(f'Editor settings are kept in memory only: {ex}')
            signals.warning.emit(str(ex))

    @property
    def state(self) -> SessionState:
        if self._selected_name is None:
            return SessionState.NoSelection
        if self._dirty:
            return SessionState.Editing
        return SessionState.Selected

    @property
    def selected_name(self) -> Optional[str]:
        return self._selected_name

    @property
    def draft_text(self) -> str:
        return self._draft_text

    @property
    def editing_name(self) -> Optional[str]:
        return self._editing_name

    @property
    def target_path(self) -> Optional[str]:
        return self.settings.target_path

    def _require_selection(self) -> str:
        if self._selected_name is None:
            raise status.NoSelectionException()
        return self._selected_name

    def select_preset(self, name: str) -> None:
        """Select a preset and load its pretty-printed value as the draft.

        Raises:
            status.NotFoundException: If name is not in the store.
        """
        document = self.store.value(name)
        self._selected_name = name
        self._draft_text = document.to_text()
        self._dirty = False
        self._editing_name = None
        self.selectionChanged.emit(name)
        self.draftReset.emit(self._draft_text)

    def clear_selection(self) -> None:
        self._selected_name = None
        self._draft_text = ''
        self._dirty = False
        self._editing_name = None
        self.selectionChanged.emit('')
        self.draftReset.emit('')

    def edit_draft(self, text: str) -> None:
        """Store the editor text verbatim. The text may be invalid JSON.

        Raises:
            status.NoSelectionException: If no preset is selected.
        """
        self._require_selection()
        self._draft_text = text
        self._dirty = True

    def commit_draft(self) -> Document:
        """Parse the draft and store it as the selected preset's value.

        On a parse failure the store and the draft are left as they were.

        Raises:
            status.NoSelectionException: If no preset is selected.
            status.InvalidJsonException: If the draft is not valid JSON.
        """
        name = self._require_selection()
        document = Document.from_text(self._draft_text)
        self.store.set_value(name, document)
        self._dirty = False
        return document

    def publish_selected(self) -> pathlib.Path:
        """Write the selected preset's stored value to the target config file.

        Raises:
            status.NoTargetException: If no target path is set. Nothing is written.
            status.NoSelectionException: If no preset is selected.
            status.TargetWriteException: If the target cannot be written.
        """
        target = self.settings.target_path
        if not target:
            raise status.NoTargetException()
        name = self._require_selection()
        return self.gateway.publish_to_target(target, self.store.value(name))

    def begin_rename(self, name: Optional[str] = None) -> None:
        """Mark a preset as being renamed. Defaults to the selected preset."""
        name = name if name is not None else self._require_selection()
        if name not in self.store:
            raise status.NotFoundException(f'No preset named \'{name}\'')
        self._editing_name = name

    def cancel_rename(self) -> None:
        self._editing_name = None

    def rename(self, old_name: str, new_name: str) -> str:
        """Rename any preset; the selection follows the renamed entry.

        Returns:
            The stored name.
        """
        stored = self.store.rename(old_name, new_name)
        self._editing_name = None
        if self._selected_name == old_name and stored != old_name:
            self._selected_name = stored
            self.selectionChanged.emit(stored)
        return stored

    def rename_selected(self, new_name: str) -> str:
        """Rename the selected preset. Store errors are raised unchanged.

        Raises:
            status.NoSelectionException: If no preset is selected.
        """
        return self.rename(self._require_selection(), new_name)

    def delete(self, name: str) -> bool:
        """Delete a preset. Confirmation is the caller's responsibility."""
        removed = self.store.delete(name)
        if self._editing_name == name:
            self._editing_name = None
        if removed and self._selected_name == name:
            self.clear_selection()
        return removed

    def delete_selected(self) -> bool:
        """
        Raises:
            status.NoSelectionException: If no preset is selected.
        """
        return self.delete(self._require_selection())

    def add_preset(self, name_hint: str = DEFAULT_PRESET_NAME) -> str:
        """Add an empty preset and select it."""
        name = self.store.add(name_hint)
        self.select_preset(name)
        return name

    def add_presets_from_files(self, paths: Iterable[Union[str, pathlib.Path]]) -> List[str]:
        """Add one preset per JSON object file, named after the file stem.

        Files that cannot be read or are not JSON objects are skipped with a warning.
        The last added preset is selected.

        Returns:
            The names of the added presets.
        """
        added = []
        for path in paths:
            path = pathlib.Path(path)
            try:
                document = self.gateway.read_document(path)
                added.append(self.store.add_from_document(path.stem, document))
            except status.BaseStatusException as ex:
                logging.warning(f'Skipped "{path}": {ex}')
                continue
        if added:
            self.select_preset(added[-1])
        return added

    def import_presets(self, path: Union[str, pathlib.Path]) -> None:
        """Replace the whole store with a config set file.

        Raises:
            status.FileReadException: If the file cannot be read.
            status.InvalidJsonException: If the file is not valid JSON.
            status.InvalidShapeException: If the file is not a JSON object.
        """
        document = self.gateway.read_document(path)
        self.store.import_all(document)
        if self._selected_name is None:
            return
        if self._selected_name in self.store:
            self.select_preset(self._selected_name)
        else:
            self.clear_selection()

    def export_presets(self, path: Union[str, pathlib.Path]) -> pathlib.Path:
        """Write the whole store to a config set file."""
        return self.gateway.export_presets(path, self.store)

    def set_target_path(self, path: Optional[Union[str, pathlib.Path]]) -> None:
        self.settings.set_target_path(path)
