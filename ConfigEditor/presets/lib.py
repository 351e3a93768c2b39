import logging
from typing import Dict, Iterator, List, Mapping, Optional

from PySide6 import QtCore

from ..core.document import Document
from ..status import status

DEFAULT_PRESET_NAME = 'NewPreset'


class PresetStore(QtCore.QObject):
    """
    Ordered collection of named JSON presets.

    Names are unique and non-empty. Iteration order is insertion order and
    is kept across renames: a renamed entry stays where it was.

    Every successful mutation emits its specific signal followed by
    presetsChanged. No-ops emit nothing.
    """

    # Signals to notify views of changes
    presetsReloaded = QtCore.Signal()
    presetAdded = QtCore.Signal(int)
    presetRemoved = QtCore.Signal(int)
    presetRenamed = QtCore.Signal(int)
    presetUpdated = QtCore.Signal(int)

    # Emitted after any mutation; drives persistence
    presetsChanged = QtCore.Signal()

    def __init__(self, entries: Optional[Mapping[str, Document]] = None,
                 parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent)
        self._data: Dict[str, Document] = {}
        for name, value in (entries or {}).items():
            if not name or not name.strip():
                logging.warning('Skipped preset with an empty name')
                continue
            self._data[name] = Document(value)

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __repr__(self) -> str:
        return f'<PresetStore names={self.names()!r}>'

    def names(self) -> List[str]:
        """Return the preset names in store order."""
        return list(self._data)

    def index(self, name: str) -> int:
        """Return the position of name in store order.

        Raises:
            status.NotFoundException: If name is not in the store.
        """
        try:
            return self.names().index(name)
        except ValueError:
            raise status.NotFoundException(f'No preset named \'{name}\'') from None

    def value(self, name: str) -> Document:
        """Return the document stored under name.

        Raises:
            status.NotFoundException: If name is not in the store.
        """
        if name not in self._data:
            raise status.NotFoundException(f'No preset named \'{name}\'')
        return self._data[name]

    def get(self, name: str) -> Optional[Document]:
        return self._data.get(name)

    def to_document(self) -> Document:
        """Return the whole store as one object document, in store order."""
        return Document({k: v.data for k, v in self._data.items()})

    def unique_name(self, name_hint: str) -> str:
        """Return name_hint, or name_hint_1, name_hint_2, ... whichever is free first.

        Terminates within len(self) + 1 probes.
        """
        base = (name_hint or '').strip() or DEFAULT_PRESET_NAME
        if base not in self._data:
            return base
        n = 1
        while f'{base}_{n}' in self._data:
            n += 1
        return f'{base}_{n}'

    def add(self, name_hint: str = DEFAULT_PRESET_NAME) -> str:
        """Add an empty-object preset under a unique name derived from name_hint.

        Returns:
            The name the preset was stored under.
        """
        return self._insert(name_hint, Document.empty_object())

    def add_from_document(self, name_hint: str, document: Document) -> str:
        """Add a preset seeded with document under a unique name.

        Raises:
            status.InvalidShapeException: If document is not a JSON object.
        """
        document = Document(document)
        if not document.is_object:
            raise status.InvalidShapeException(f'Got a {document.type.name.lower()}.')
        return self._insert(name_hint, document)

    def _insert(self, name_hint: str, document: Document) -> str:
        name = self.unique_name(name_hint)
        self._data[name] = document
        idx = len(self._data) - 1
        logging.debug(f'Added preset "{name}" at row {idx}')
        self.presetAdded.emit(idx)
        self.presetsChanged.emit()
        return name

    def delete(self, name: str) -> bool:
        """Remove a preset. Does nothing when name is absent.

        Returns:
            True if a preset was removed.
        """
        if name not in self._data:
            logging.debug(f'Delete ignored, no preset named "{name}"')
            return False
        idx = self.names().index(name)
        del self._data[name]
        logging.debug(f'Removed preset "{name}"')
        self.presetRemoved.emit(idx)
        self.presetsChanged.emit()
        return True

    def rename(self, old_name: str, new_name: str) -> str:
        """Rename a preset in place, keeping its position and value.

        Returns:
            The stored name (new_name stripped of surrounding whitespace).

        Raises:
            status.EmptyKeyException: If new_name is empty after trimming.
            status.NotFoundException: If old_name is not in the store.
            status.DuplicateKeyException: If another preset is already named new_name.
        """
        if new_name == old_name and old_name in self._data:
            # Names loaded from disk may carry surrounding whitespace; leave them as they are
            return old_name
        new_name = (new_name or '').strip()
        if not new_name:
            raise status.EmptyKeyException()
        if old_name not in self._data:
            raise status.NotFoundException(f'No preset named \'{old_name}\'')
        if new_name == old_name:
            return new_name
        if new_name in self._data:
            raise status.DuplicateKeyException(f'\'{new_name}\'')

        idx = self.names().index(old_name)
        # Rebuild with the key swapped so the entry keeps its position
        self._data = {
            (new_name if k == old_name else k): v
            for k, v in self._data.items()
        }
        logging.debug(f'Renamed preset "{old_name}" to "{new_name}"')
        self.presetRenamed.emit(idx)
        self.presetsChanged.emit()
        return new_name

    def set_value(self, name: str, document: Document) -> None:
        """Overwrite the document stored under name.

        Raises:
            status.NotFoundException: If name is not in the store.
        """
        if name not in self._data:
            raise status.NotFoundException(f'No preset named \'{name}\'')
        self._data[name] = Document(document)
        idx = self.names().index(name)
        self.presetUpdated.emit(idx)
        self.presetsChanged.emit()

    def import_all(self, document: Document) -> None:
        """Replace the whole store with the entries of an object document.

        Raises:
            status.InvalidShapeException: If document is not a JSON object, or has an empty key.
        """
        document = Document(document)
        if not document.is_object:
            raise status.InvalidShapeException(f'Got a {document.type.name.lower()}.')
        entries = dict(document.items())
        if any(not k.strip() for k in entries):
            raise status.InvalidShapeException('Preset names cannot be empty.')
        self._data = entries
        logging.debug(f'Imported {len(entries)} presets')
        self.presetsReloaded.emit()
        self.presetsChanged.emit()
