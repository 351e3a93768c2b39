# tests/test_session.py
"""
Unit-tests for ConfigEditor.core.session.EditorSession
(covers selection and draft states, commands, and write-through persistence).

Run with:
    python -m unittest tests.test_session
"""
from unittest.mock import patch

from ConfigEditor.core.document import Document
from ConfigEditor.core.session import EditorSession, SessionState
from ConfigEditor.status import status
from ConfigEditor.ui.actions import signals
from tests.base import BaseTestCase, read_json, write_json

SAMPLE = {
    'obsidian': {'mcp': {'inputs': [], 'servers': {}}},
    'notion': {'settings': {'theme': 'dark', 'fontSize': 14}},
}


class SessionLoadTests(BaseTestCase):

    def test_load_reads_both_files(self):
        self.write_presets(SAMPLE)
        self.write_settings({'targetPath': '/x/config.json'})
        session = self.load_session()
        self.assertEqual(session.store.names(), ['obsidian', 'notion'])
        self.assertEqual(session.target_path, '/x/config.json')
        self.assertIs(session.state, SessionState.NoSelection)

    def test_load_without_files(self):
        session = self.load_session()
        self.assertEqual(len(session.store), 0)
        self.assertIsNone(session.target_path)
        # Loading never writes
        self.assertFalse(self.paths.presets_path.exists())
        self.assertFalse(self.paths.settings_path.exists())


class SessionCommandTests(BaseTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.write_presets({'a': {'x': 1}, 'b': {'y': 2}})
        self.session: EditorSession = self.load_session()

    def test_select_loads_pretty_draft(self):
        self.session.select_preset('a')
        self.assertIs(self.session.state, SessionState.Selected)
        self.assertEqual(self.session.selected_name, 'a')
        self.assertEqual(self.session.draft_text, '{\n  "x": 1\n}')

    def test_select_missing_fails(self):
        with self.assertRaises(status.NotFoundException):
            self.session.select_preset('zzz')
        self.assertIs(self.session.state, SessionState.NoSelection)

    def test_select_emits(self):
        names, drafts = [], []
        self.session.selectionChanged.connect(lambda name: names.append(name))
        self.session.draftReset.connect(lambda text: drafts.append(text))
        self.session.select_preset('b')
        self.assertEqual(names, ['b'])
        self.assertEqual(drafts, ['{\n  "y": 2\n}'])

    def test_edit_commit_scenario(self):
        self.session.select_preset('a')
        self.session.edit_draft('{"x":2}')
        self.assertIs(self.session.state, SessionState.Editing)

        self.assertEqual(self.session.commit_draft(), Document({'x': 2}))
        self.assertIs(self.session.state, SessionState.Selected)
        self.assertEqual(self.session.store.to_document().data, {'a': {'x': 2}, 'b': {'y': 2}})
        self.assertEqual(self.session.store.names(), ['a', 'b'])
        self.assertEqual(read_json(self.paths.presets_path), {'a': {'x': 2}, 'b': {'y': 2}})

    def test_commit_invalid_json_keeps_store_and_draft(self):
        self.session.select_preset('a')
        self.session.edit_draft('{invalid')
        with self.assertRaises(status.InvalidJsonException):
            self.session.commit_draft()
        self.assertEqual(self.session.store.value('a'), Document({'x': 1}))
        self.assertEqual(self.session.draft_text, '{invalid')
        self.assertIs(self.session.state, SessionState.Editing)

    def test_lone_surrogate_draft_leaves_files_intact(self):
        target = self.temp_dir / 'claude_desktop_config.json'
        write_json(target, {'keep': True})
        self.session.set_target_path(target)
        self.session.select_preset('a')
        presets_before = self.paths.presets_path.read_text(encoding='utf-8')

        self.session.edit_draft('{"x": "\\ud800"}')
        with self.assertRaises(status.InvalidJsonException):
            self.session.commit_draft()
        self.session.publish_selected()

        self.assertEqual(self.session.store.value('a'), Document({'x': 1}))
        self.assertEqual(read_json(target), {'x': 1})
        self.assertEqual(self.paths.presets_path.read_text(encoding='utf-8'), presets_before)

    def test_deeply_nested_draft_is_invalid_json(self):
        self.session.select_preset('a')
        for depth in (500, 900):
            with self.subTest(depth=depth):
                self.session.edit_draft('[' * depth + ']' * depth)
                with self.assertRaises(status.InvalidJsonException):
                    self.session.commit_draft()
        self.assertEqual(self.session.store.value('a'), Document({'x': 1}))

    def test_edit_without_selection_fails(self):
        with self.assertRaises(status.NoSelectionException):
            self.session.edit_draft('{}')
        with self.assertRaises(status.NoSelectionException):
            self.session.commit_draft()

    def test_publish_without_target_writes_nothing(self):
        self.session.select_preset('a')
        with patch('ConfigEditor.core.filesystem.write_text') as write_text:
            with self.assertRaises(status.NoTargetException):
                self.session.publish_selected()
            write_text.assert_not_called()

    def test_publish_without_target_checked_before_selection(self):
        with self.assertRaises(status.NoTargetException):
            self.session.publish_selected()

    def test_publish_without_selection_fails(self):
        self.session.set_target_path(self.temp_dir / 'config.json')
        with self.assertRaises(status.NoSelectionException):
            self.session.publish_selected()
        self.assertFalse((self.temp_dir / 'config.json').exists())

    def test_publish_writes_stored_value(self):
        target = self.temp_dir / 'claude_desktop_config.json'
        write_json(target, {'previous': True})
        self.session.set_target_path(target)
        self.session.select_preset('b')
        self.session.edit_draft('{"uncommitted": 1}')

        self.assertEqual(self.session.publish_selected(), target)
        self.assertEqual(read_json(target), {'y': 2})

    def test_publish_missing_directory_fails(self):
        self.session.set_target_path(self.temp_dir / 'missing' / 'config.json')
        self.session.select_preset('a')
        with self.assertRaises(status.TargetWriteException):
            self.session.publish_selected()

    def test_rename_selected(self):
        self.session.select_preset('a')
        self.assertEqual(self.session.rename_selected('alpha'), 'alpha')
        self.assertEqual(self.session.selected_name, 'alpha')
        self.assertEqual(self.session.store.names(), ['alpha', 'b'])
        self.assertEqual(list(read_json(self.paths.presets_path)), ['alpha', 'b'])

    def test_rename_selected_duplicate_surfaces_error(self):
        self.session.select_preset('a')
        with self.assertRaises(status.DuplicateKeyException):
            self.session.rename_selected('b')
        self.assertEqual(self.session.selected_name, 'a')
        self.assertEqual(self.session.store.names(), ['a', 'b'])

    def test_rename_selected_empty_surfaces_error(self):
        self.session.select_preset('a')
        with self.assertRaises(status.EmptyKeyException):
            self.session.rename_selected(' ')

    def test_rename_selected_without_selection(self):
        with self.assertRaises(status.NoSelectionException):
            self.session.rename_selected('x')

    def test_rename_other_keeps_selection(self):
        self.session.select_preset('a')
        self.session.rename('b', 'beta')
        self.assertEqual(self.session.selected_name, 'a')

    def test_rename_tracking(self):
        self.session.select_preset('a')
        self.session.begin_rename()
        self.assertEqual(self.session.editing_name, 'a')
        self.session.rename_selected('alpha')
        self.assertIsNone(self.session.editing_name)

        self.session.begin_rename('b')
        self.assertEqual(self.session.editing_name, 'b')
        self.session.cancel_rename()
        self.assertIsNone(self.session.editing_name)

        with self.assertRaises(status.NotFoundException):
            self.session.begin_rename('zzz')

    def test_delete_selected_clears_selection(self):
        self.session.select_preset('a')
        self.session.edit_draft('{"draft": true}')
        self.assertTrue(self.session.delete_selected())
        self.assertIs(self.session.state, SessionState.NoSelection)
        self.assertIsNone(self.session.selected_name)
        self.assertEqual(self.session.draft_text, '')
        self.assertEqual(read_json(self.paths.presets_path), {'b': {'y': 2}})

    def test_delete_other_keeps_selection(self):
        self.session.select_preset('a')
        self.session.delete('b')
        self.assertEqual(self.session.selected_name, 'a')
        self.assertEqual(self.session.draft_text, '{\n  "x": 1\n}')

    def test_delete_missing_is_noop(self):
        self.assertFalse(self.session.delete('zzz'))
        self.assertEqual(self.session.store.names(), ['a', 'b'])

    def test_add_preset_selects(self):
        name = self.session.add_preset('NewPreset')
        self.assertEqual(name, 'NewPreset')
        self.assertEqual(self.session.selected_name, 'NewPreset')
        self.assertEqual(self.session.draft_text, '{}')
        self.assertEqual(self.session.add_preset('NewPreset'), 'NewPreset_1')
        self.assertEqual(read_json(self.paths.presets_path)['NewPreset_1'], {})

    def test_add_presets_from_files(self):
        good = self.temp_dir / 'a.json'
        write_json(good, {'from': 'file'})
        array = self.temp_dir / 'array.json'
        write_json(array, [1, 2])
        bad = self.temp_dir / 'bad.json'
        bad.write_text('{nope', encoding='utf-8')
        missing = self.temp_dir / 'missing.json'

        added = self.session.add_presets_from_files([good, array, bad, missing])
        self.assertEqual(added, ['a_1'])
        self.assertEqual(self.session.store.value('a_1').data, {'from': 'file'})
        self.assertEqual(self.session.selected_name, 'a_1')

    def test_import_presets_replaces_store(self):
        path = self.temp_dir / 'set.json'
        write_json(path, {'z': {}, 'b': {'new': True}})
        self.session.select_preset('b')
        self.session.import_presets(path)
        self.assertEqual(self.session.store.names(), ['z', 'b'])
        self.assertEqual(self.session.selected_name, 'b')
        self.assertEqual(self.session.draft_text, '{\n  "new": true\n}')
        self.assertEqual(read_json(self.paths.presets_path), {'z': {}, 'b': {'new': True}})

    def test_import_presets_clears_dropped_selection(self):
        path = self.temp_dir / 'set.json'
        write_json(path, {'z': {}})
        self.session.select_preset('a')
        self.session.import_presets(path)
        self.assertIs(self.session.state, SessionState.NoSelection)

    def test_import_presets_rejects_non_object(self):
        path = self.temp_dir / 'set.json'
        write_json(path, [1])
        with self.assertRaises(status.InvalidShapeException):
            self.session.import_presets(path)
        self.assertEqual(self.session.store.names(), ['a', 'b'])

    def test_export_presets(self):
        path = self.temp_dir / 'export.json'
        self.session.export_presets(path)
        self.assertEqual(read_json(path), {'a': {'x': 1}, 'b': {'y': 2}})

    def test_set_target_path_persists(self):
        self.session.set_target_path('/x/claude_desktop_config.json')
        self.assertEqual(read_json(self.paths.settings_path), {'targetPath': '/x/claude_desktop_config.json'})
        self.assertEqual(self.load_session().target_path, '/x/claude_desktop_config.json')


class WriteThroughFailureTests(BaseTestCase):

    def test_failed_save_keeps_memory_and_warns(self):
        session = self.load_session()
        warnings = []

        def _slot(message: str) -> None:
            warnings.append(message)

        signals.warning.connect(_slot)
        try:
            with patch('ConfigEditor.core.filesystem.write_text', side_effect=PermissionError('denied')):
                name = session.add_preset('X')
                session.set_target_path('/x.json')
        finally:
            signals.warning.disconnect(_slot)

        self.assertEqual(session.store.names(), [name])
        self.assertEqual(session.target_path, '/x.json')
        self.assertEqual(len(warnings), 2)
        self.assertFalse(self.paths.presets_path.exists())

        # The next successful mutation brings the file up to date
        session.add_preset('Y')
        self.assertEqual(list(read_json(self.paths.presets_path)), ['X', 'Y'])
