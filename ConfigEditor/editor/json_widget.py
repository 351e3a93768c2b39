"""
JSON text editor bound to an editor session's draft.

.. seealso:: :mod:`ConfigEditor.core.session`
"""
from PySide6 import QtWidgets, QtCore, QtGui

from ..core import document
from ..status import status


def check_json_text(text: str) -> str:
    """Return '' when text can be saved as a preset, otherwise a short error description."""
    return document.check_text(text)


class JSONWidget(QtWidgets.QWidget):
    """
    A widget to edit the selected preset's JSON text.

    Typing updates the session's draft verbatim. The draft is validated only on
    commit; the status line shows whether the current text parses.
    """
    draftCommitted = QtCore.Signal(str)
    draftPublished = QtCore.Signal(str)

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self._session = session

        self.text_edit = None
        self.status_label = None
        self.commit_button = None
        self.publish_button = None

        self._create_ui()
        self._connect_signals()
        self.set_text(self._session.draft_text)

    def _create_ui(self):
        QtWidgets.QVBoxLayout(self)

        self.text_edit = QtWidgets.QPlainTextEdit(self)
        self.text_edit.setLineWrapMode(QtWidgets.QPlainTextEdit.NoWrap)
        font = QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.FixedFont)
        self.text_edit.setFont(font)
        self.text_edit.setPlaceholderText('Select a configuration key or add a new one')
        self.layout().addWidget(self.text_edit, 1)

        self.status_label = QtWidgets.QLabel(self)
        self.layout().addWidget(self.status_label)

        row = QtWidgets.QHBoxLayout()
        self.commit_button = QtWidgets.QPushButton('Save Preset', self)
        self.commit_button.setShortcut('Ctrl+S')
        self.publish_button = QtWidgets.QPushButton('✔ Apply to Config File', self)
        row.addStretch(1)
        row.addWidget(self.commit_button)
        row.addWidget(self.publish_button)
        self.layout().addLayout(row)

    def _connect_signals(self):
        self.text_edit.textChanged.connect(self.on_text_changed)
        self._session.draftReset.connect(self.set_text)
        self._session.selectionChanged.connect(self.update_state)
        self.commit_button.clicked.connect(self.commit)
        self.publish_button.clicked.connect(self.publish)

    @QtCore.Slot(str)
    def set_text(self, text: str) -> None:
        """Replace the editor text without feeding it back to the session."""
        blocker = QtCore.QSignalBlocker(self.text_edit)
        self.text_edit.setPlainText(text)
        del blocker
        self.update_state()

    @QtCore.Slot()
    def update_state(self, *args) -> None:
        has_selection = self._session.selected_name is not None
        self.text_edit.setEnabled(has_selection)
        self.commit_button.setEnabled(has_selection)
        self.publish_button.setEnabled(has_selection and bool(self._session.target_path))

        if not has_selection:
            self.status_label.setText('')
            return
        error = check_json_text(self.text_edit.toPlainText())
        self.status_label.setText(f'Invalid JSON: {error}' if error else 'Valid JSON')

    @QtCore.Slot()
    def on_text_changed(self) -> None:
        if self._session.selected_name is None:
            return
        self._session.edit_draft(self.text_edit.toPlainText())
        self.update_state()

    @QtCore.Slot()
    def commit(self) -> bool:
        try:
            self._session.commit_draft()
        except status.BaseStatusException as ex:
            QtWidgets.QMessageBox.warning(self, 'Save Preset', str(ex))
            return False
        self.draftCommitted.emit(self._session.selected_name)
        return True

    @QtCore.Slot()
    def publish(self) -> None:
        """Commit the draft, then write the preset to the target config file."""
        ready = self._session.target_path and self._session.selected_name is not None
        if ready and not self.commit():
            return
        try:
            path = self._session.publish_selected()
        except status.BaseStatusException as ex:
            QtWidgets.QMessageBox.critical(self, 'Apply to Config File', str(ex))
            return
        self.draftPublished.emit(str(path))
        QtWidgets.QMessageBox.information(
            self, 'Apply to Config File', f'Configuration applied to {path}')
