"""Qt model listing the session's presets in store order."""

import enum
from typing import Any, Optional

from PySide6 import QtCore, QtGui

from ..core.document import DocumentType
from ..status import status

NameRole = QtCore.Qt.UserRole
DocumentRole = QtCore.Qt.UserRole + 1


class Columns(enum.IntEnum):
    Name = 0
    Summary = 1


def summarize(document) -> str:
    """Short description of a document, e.g. '3 keys'."""
    match document.type:
        case DocumentType.Object:
            n = len(document.data)
            return f'{n} key' if n == 1 else f'{n} keys'
        case DocumentType.Array:
            n = len(document.data)
            return f'{n} item' if n == 1 else f'{n} items'
        case _:
            return document.type.name.lower()


class PresetModel(QtCore.QAbstractItemModel):
    """QAbstractItemModel over an :class:`~ConfigEditor.core.session.EditorSession`'s presets.

    The model never sorts: row order is store order.
    """

    def __init__(self, session, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent=parent)
        self._session = session
        self._connect_signals()

    def session(self):
        return self._session

    def _connect_signals(self) -> None:
        store = self._session.store
        store.presetAdded.connect(self._reset_model)
        store.presetRemoved.connect(self._reset_model)
        store.presetRenamed.connect(self._reset_model)
        store.presetsReloaded.connect(self._reset_model)
        store.presetUpdated.connect(self._row_changed)
        self._session.selectionChanged.connect(self._all_rows_changed)

    def _all_rows_changed(self, *args) -> None:
        if not self.rowCount():
            return
        self.dataChanged.emit(self.index(0, 0), self.index(self.rowCount() - 1, self.columnCount() - 1))

    def _reset_model(self, *args) -> None:
        self.beginResetModel()
        self.endResetModel()

    def _row_changed(self, row: int) -> None:
        self.dataChanged.emit(self.index(row, 0), self.index(row, self.columnCount() - 1))

    def name(self, row: int) -> Optional[str]:
        names = self._session.store.names()
        if 0 <= row < len(names):
            return names[row]
        return None

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._session.store)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        return len(Columns)

    def index(
            self,
            row: int,
            column: int = 0,
            parent: QtCore.QModelIndex = QtCore.QModelIndex()
    ) -> QtCore.QModelIndex:
        if (
                parent.isValid() or
                row < 0 or
                row >= self.rowCount() or
                column < 0 or
                column >= self.columnCount()
        ):
            return QtCore.QModelIndex()
        return self.createIndex(row, column)

    def parent(self, index: QtCore.QModelIndex) -> QtCore.QModelIndex:
        """Flat list has no parent."""
        return QtCore.QModelIndex()

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.DisplayRole) -> Any:
        if not index.isValid():
            return None

        name = self.name(index.row())
        if name is None:
            return None
        col = index.column()

        if role in (QtCore.Qt.DisplayRole, QtCore.Qt.ToolTipRole):
            if col == Columns.Name:
                return name
            if col == Columns.Summary:
                return summarize(self._session.store.value(name))
            return None

        if role == QtCore.Qt.EditRole and col == Columns.Name:
            return name

        if role == QtCore.Qt.FontRole and col == Columns.Name:
            if name == self._session.selected_name:
                font = QtGui.QFont()
                font.setBold(True)
                return font

        if role == QtCore.Qt.TextAlignmentRole:
            if col == Columns.Summary:
                return QtCore.Qt.AlignVCenter | QtCore.Qt.AlignRight
            return QtCore.Qt.AlignVCenter | QtCore.Qt.AlignLeft

        if role == NameRole:
            return name

        if role == DocumentRole:
            return self._session.store.value(name)

        return None

    def flags(self, index: QtCore.QModelIndex) -> QtCore.Qt.ItemFlags:
        """Items are selectable; names are editable."""
        if not index.isValid():
            return QtCore.Qt.NoItemFlags
        flags = QtCore.Qt.ItemIsEnabled | QtCore.Qt.ItemIsSelectable
        if index.column() == Columns.Name:
            flags |= QtCore.Qt.ItemIsEditable
        return flags

    def setData(self, index: QtCore.QModelIndex, value: Any, role: int = QtCore.Qt.EditRole) -> bool:
        """Rename through the session. Failures are reported by the exception and leave the row as is."""
        if role != QtCore.Qt.EditRole or not index.isValid() or index.column() != Columns.Name:
            return False
        name = self.name(index.row())
        if name is None:
            return False
        try:
            self._session.rename(name, str(value))
        except status.BaseStatusException:
            return False
        return True

    def headerData(
            self,
            section: int,
            orientation: QtCore.Qt.Orientation,
            role: int = QtCore.Qt.DisplayRole
    ) -> Any:
        if orientation == QtCore.Qt.Horizontal and role == QtCore.Qt.DisplayRole:
            if section == Columns.Name:
                return 'Name'
            if section == Columns.Summary:
                return 'Content'
        return None
