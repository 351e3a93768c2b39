"""Preset list view and dock widget.

Every toolbar action calls one session command and turns a raised
:class:`~ConfigEditor.status.status.BaseStatusException` into an alert.
"""
import logging

from PySide6 import QtWidgets, QtGui, QtCore

from .model import PresetModel, Columns, NameRole
from ..core import filesystem
from ..status import status


class PresetsListView(QtWidgets.QTableView):
    """Table view listing presets; selecting a row selects the preset in the session."""

    def __init__(self, session, parent=None) -> None:
        super().__init__(parent=parent)
        self._session = session

        self.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        self.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self.setEditTriggers(QtWidgets.QAbstractItemView.DoubleClicked |
                             QtWidgets.QAbstractItemView.EditKeyPressed)

        self._init_model()
        self._init_header()
        self._connect_signals()

    def _init_model(self) -> None:
        self.setModel(PresetModel(self._session, parent=self))

    def _init_header(self) -> None:
        header = self.horizontalHeader()
        header.setSectionResizeMode(Columns.Name, QtWidgets.QHeaderView.Stretch)
        header.setSectionResizeMode(Columns.Summary, QtWidgets.QHeaderView.ResizeToContents)

        header = self.verticalHeader()
        header.setVisible(False)

        self.setCornerButtonEnabled(False)

    def _connect_signals(self) -> None:
        self.selectionModel().currentRowChanged.connect(self.on_current_row_changed)
        self._session.selectionChanged.connect(self.on_session_selection_changed)
        # The model is reset on structural changes, which drops the view selection
        self.model().modelReset.connect(
            lambda: self.on_session_selection_changed(self._session.selected_name or ''))

    @QtCore.Slot(QtCore.QModelIndex, QtCore.QModelIndex)
    def on_current_row_changed(self, current: QtCore.QModelIndex, previous: QtCore.QModelIndex) -> None:
        if not current.isValid():
            return
        name = current.data(NameRole)
        if not name or name == self._session.selected_name:
            return
        try:
            self._session.select_preset(name)
        except status.BaseStatusException as ex:
            logging.debug(f'Could not select "{name}": {ex}')

    @QtCore.Slot(str)
    def on_session_selection_changed(self, name: str) -> None:
        model = self.model()
        if not name:
            self.selectionModel().clearSelection()
            return
        try:
            row = self._session.store.index(name)
        except status.NotFoundException:
            return
        index = model.index(row, Columns.Name)
        blocker = QtCore.QSignalBlocker(self.selectionModel())
        self.selectionModel().setCurrentIndex(
            index,
            QtCore.QItemSelectionModel.ClearAndSelect | QtCore.QItemSelectionModel.Rows
        )
        del blocker
        self.scrollTo(index)


class PresetsDockWidget(QtWidgets.QDockWidget):
    """
    Dockable widget for listing and managing presets.
    """

    def __init__(self, session, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__('Presets', parent=parent)
        self.setObjectName('ConfigEditorPresetsWidget')
        self._session = session

        self.setFeatures(
            QtWidgets.QDockWidget.DockWidgetMovable |
            QtWidgets.QDockWidget.DockWidgetFloatable
        )

        self.toolbar: QtWidgets.QToolBar
        self.view: PresetsListView

        self._create_ui()
        self._init_actions()

    def _create_ui(self) -> None:
        content = QtWidgets.QWidget(self)
        layout = QtWidgets.QVBoxLayout(content)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        self.toolbar = QtWidgets.QToolBar(content)
        self.toolbar.setToolButtonStyle(QtCore.Qt.ToolButtonTextOnly)
        self.toolbar.setMovable(False)
        layout.addWidget(self.toolbar)

        self.view = PresetsListView(self._session, parent=content)
        self.view.setContextMenuPolicy(QtCore.Qt.ActionsContextMenu)
        layout.addWidget(self.view)

        self.setWidget(content)

    def _init_actions(self) -> None:
        """Initialize toolbar actions for managing presets."""

        # Add Preset
        @QtCore.Slot()
        def add_preset() -> None:
            name, ok = QtWidgets.QInputDialog.getText(
                self, 'Add Preset', 'Preset name:', text='NewPreset')
            if not ok:
                return
            self._session.add_preset(name)

        action = QtGui.QAction('+ Add', self)
        action.setShortcut('Ctrl+N')
        action.setStatusTip('Add an empty preset')
        action.triggered.connect(add_preset)
        self.toolbar.addAction(action)

        # Add From Files
        @QtCore.Slot()
        def add_from_files() -> None:
            paths = filesystem.open_file_dialog(self, 'Add Presets From Files', multiple=True)
            if not paths:
                return
            added = self._session.add_presets_from_files(paths)
            if len(added) < len(paths):
                QtWidgets.QMessageBox.warning(
                    self, 'Add From Files',
                    f'Added {len(added)} of {len(paths)} files. '
                    'Files that are not JSON objects were skipped, see the log for details.'
                )

        action = QtGui.QAction('Add From Files…', self)
        action.setStatusTip('Add a preset for each selected JSON file')
        action.triggered.connect(add_from_files)
        self.toolbar.addAction(action)

        # Rename Preset
        @QtCore.Slot()
        def rename_preset() -> None:
            name = self._session.selected_name
            if name is None:
                return
            self._session.begin_rename(name)
            new_name, ok = QtWidgets.QInputDialog.getText(
                self, 'Rename Preset', 'New name:', text=name)
            if not ok:
                self._session.cancel_rename()
                return
            try:
                self._session.rename_selected(new_name)
            except status.BaseStatusException as ex:
                self._session.cancel_rename()
                QtWidgets.QMessageBox.critical(self, 'Rename Preset', str(ex))

        action = QtGui.QAction('Rename', self)
        action.setShortcut('F2')
        action.setStatusTip('Rename selected preset')
        action.triggered.connect(rename_preset)
        self.toolbar.addAction(action)

        # Delete Preset
        @QtCore.Slot()
        def delete_preset() -> None:
            name = self._session.selected_name
            if name is None:
                return
            r = QtWidgets.QMessageBox.question(
                self, 'Delete Preset',
                f'Delete preset "{name}"? This cannot be undone.',
                QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
            )
            if r != QtWidgets.QMessageBox.Yes:
                return
            self._session.delete_selected()

        action = QtGui.QAction('Delete', self)
        action.setShortcut('Delete')
        action.setStatusTip('Delete selected preset')
        action.triggered.connect(delete_preset)
        self.toolbar.addAction(action)

        # Import Config Set
        @QtCore.Slot()
        def import_presets() -> None:
            paths = filesystem.open_file_dialog(self, 'Import Config Set')
            if not paths:
                return
            r = QtWidgets.QMessageBox.question(
                self, 'Import Config Set',
                'Replace all presets with the contents of the selected file?',
                QtWidgets.QMessageBox.Yes | QtWidgets.QMessageBox.No
            )
            if r != QtWidgets.QMessageBox.Yes:
                return
            try:
                self._session.import_presets(paths[0])
            except status.BaseStatusException as ex:
                QtWidgets.QMessageBox.critical(self, 'Import Config Set', str(ex))

        action = QtGui.QAction('Import Set…', self)
        action.setStatusTip('Replace all presets with a config set file')
        action.triggered.connect(import_presets)
        self.toolbar.addAction(action)

        # Export Config Set
        @QtCore.Slot()
        def export_presets() -> None:
            path = filesystem.save_file_dialog(self, 'Export Config Set')
            if path is None:
                return
            try:
                self._session.export_presets(path)
            except status.BaseStatusException as ex:
                QtWidgets.QMessageBox.critical(self, 'Export Config Set', str(ex))

        action = QtGui.QAction('Export Set…', self)
        action.setStatusTip('Write all presets to a config set file')
        action.triggered.connect(export_presets)
        self.toolbar.addAction(action)

        # Install toolbar actions into the list view for context menu
        self.view.addActions(self.toolbar.actions())
