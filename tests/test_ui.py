# tests/test_ui.py
"""
Headless tests for the Qt shell: preset model, JSON editor widget and main window.

Run with:
    python -m unittest tests.test_ui
"""
from unittest.mock import patch

from PySide6 import QtCore, QtWidgets

from ConfigEditor.editor.json_widget import JSONWidget, check_json_text
from ConfigEditor.presets.model import Columns, DocumentRole, NameRole, PresetModel
from ConfigEditor.ui.main import MainWindow
from tests.base import BaseTestCase, read_json


class PresetModelTests(BaseTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.write_presets({'obsidian': {'mcp': {}}, 'notion': {'a': 1, 'b': 2}, 'list': [1]})
        self.session = self.load_session()
        self.model = PresetModel(self.session)

    def test_rows_follow_store_order(self):
        self.assertEqual(self.model.rowCount(), 3)
        self.assertEqual(
            [self.model.index(r, Columns.Name).data() for r in range(3)],
            ['obsidian', 'notion', 'list'],
        )

    def test_summary_column(self):
        self.assertEqual(self.model.index(0, Columns.Summary).data(), '1 key')
        self.assertEqual(self.model.index(1, Columns.Summary).data(), '2 keys')
        self.assertEqual(self.model.index(2, Columns.Summary).data(), '1 item')

    def test_roles(self):
        index = self.model.index(1, Columns.Name)
        self.assertEqual(index.data(NameRole), 'notion')
        self.assertEqual(index.data(DocumentRole).data, {'a': 1, 'b': 2})

    def test_invalid_index(self):
        self.assertFalse(self.model.index(5, 0).isValid())
        self.assertFalse(self.model.index(0, 5).isValid())

    def test_set_data_renames_in_place(self):
        index = self.model.index(1, Columns.Name)
        self.assertTrue(self.model.setData(index, 'renamed'))
        self.assertEqual(self.session.store.names(), ['obsidian', 'renamed', 'list'])
        self.assertEqual(self.model.index(1, Columns.Name).data(), 'renamed')

    def test_set_data_duplicate_is_rejected(self):
        index = self.model.index(1, Columns.Name)
        self.assertFalse(self.model.setData(index, 'obsidian'))
        self.assertEqual(self.session.store.names(), ['obsidian', 'notion', 'list'])

    def test_model_tracks_store_changes(self):
        self.session.add_preset('new')
        self.assertEqual(self.model.rowCount(), 4)
        self.session.delete('obsidian')
        self.assertEqual(self.model.rowCount(), 3)
        self.assertEqual(self.model.index(0, Columns.Name).data(), 'notion')

    def test_name_column_is_editable(self):
        self.assertTrue(self.model.flags(self.model.index(0, Columns.Name)) & QtCore.Qt.ItemIsEditable)
        self.assertFalse(self.model.flags(self.model.index(0, Columns.Summary)) & QtCore.Qt.ItemIsEditable)


class JSONWidgetTests(BaseTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.write_presets({'a': {'x': 1}, 'b': {'y': 2}})
        self.session = self.load_session()
        self.widget = JSONWidget(self.session)

    def tearDown(self) -> None:
        self.widget.deleteLater()
        super().tearDown()

    def test_check_json_text(self):
        self.assertEqual(check_json_text('{"a": 1}'), '')
        self.assertNotEqual(check_json_text('{invalid'), '')

    def test_check_json_text_agrees_with_commit(self):
        for text in ('NaN', '{"x": Infinity}', '{"x": "\\ud800"}'):
            with self.subTest(text=text):
                self.assertNotEqual(check_json_text(text), '')

    def test_non_finite_number_is_flagged_invalid(self):
        self.session.select_preset('a')
        self.widget.text_edit.setPlainText('{"x": NaN}')
        self.assertTrue(self.widget.status_label.text().startswith('Invalid JSON'))
        with patch.object(QtWidgets.QMessageBox, 'warning') as warning:
            self.assertFalse(self.widget.commit())
            warning.assert_called_once()

    def test_disabled_without_selection(self):
        self.assertFalse(self.widget.text_edit.isEnabled())
        self.assertFalse(self.widget.commit_button.isEnabled())

    def test_selection_fills_editor(self):
        self.session.select_preset('a')
        self.assertEqual(self.widget.text_edit.toPlainText(), '{\n  "x": 1\n}')
        self.assertTrue(self.widget.text_edit.isEnabled())
        self.assertEqual(self.widget.status_label.text(), 'Valid JSON')

    def test_typing_updates_draft(self):
        self.session.select_preset('a')
        self.widget.text_edit.setPlainText('{"x": 2')
        self.assertEqual(self.session.draft_text, '{"x": 2')
        self.assertTrue(self.widget.status_label.text().startswith('Invalid JSON'))

    def test_commit(self):
        self.session.select_preset('a')
        self.widget.text_edit.setPlainText('{"x": 2}')
        self.assertTrue(self.widget.commit())
        self.assertEqual(read_json(self.paths.presets_path), {'a': {'x': 2}, 'b': {'y': 2}})

    def test_commit_invalid_shows_warning(self):
        self.session.select_preset('a')
        self.widget.text_edit.setPlainText('{invalid')
        with patch.object(QtWidgets.QMessageBox, 'warning') as warning:
            self.assertFalse(self.widget.commit())
            warning.assert_called_once()
        self.assertEqual(self.session.store.value('a').data, {'x': 1})

    def test_publish_button_needs_target(self):
        self.session.select_preset('a')
        self.assertFalse(self.widget.publish_button.isEnabled())
        self.session.set_target_path(self.temp_dir / 'config.json')
        self.widget.update_state()
        self.assertTrue(self.widget.publish_button.isEnabled())

    def test_publish_commits_then_writes(self):
        target = self.temp_dir / 'config.json'
        self.session.set_target_path(target)
        self.session.select_preset('b')
        self.widget.text_edit.setPlainText('{"y": 3}')
        with patch.object(QtWidgets.QMessageBox, 'information') as information:
            self.widget.publish()
            information.assert_called_once()
        self.assertEqual(read_json(target), {'y': 3})
        self.assertEqual(self.session.store.value('b').data, {'y': 3})


class MainWindowTests(BaseTestCase):

    def test_window_shows_target(self):
        self.write_settings({'targetPath': '/x/claude_desktop_config.json'})
        session = self.load_session()
        window = MainWindow(session)
        try:
            self.assertEqual(window.target_label.text(), '/x/claude_desktop_config.json')
            session.set_target_path(None)
            self.assertEqual(window.target_label.text(), 'No config file selected')
        finally:
            window.deleteLater()

    def test_list_selection_selects_preset(self):
        self.write_presets({'a': {}, 'b': {'y': 2}})
        session = self.load_session()
        window = MainWindow(session)
        try:
            view = window.presets_dock.view
            view.setCurrentIndex(view.model().index(1, 0))
            self.assertEqual(session.selected_name, 'b')
            self.assertEqual(window.editor.text_edit.toPlainText(), '{\n  "y": 2\n}')

            session.select_preset('a')
            self.assertEqual(view.selectionModel().currentIndex().row(), 0)
        finally:
            window.deleteLater()
