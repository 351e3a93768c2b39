"""File-system access used by the persistence gateway and the UI shell.

Plain path operations wrap :mod:`pathlib`; the pickers wrap Qt's native
file dialogs. Errors from the path operations are not caught here: callers
decide whether a failure is soft.
"""
import logging
import pathlib
from typing import List, Optional, Union

from PySide6 import QtWidgets

PathLike = Union[str, pathlib.Path]

JSON_FILTER = 'JSON files (*.json)'
ALL_FILTER = 'All files (*)'


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file.

    Raises:
        OSError: If the file is missing or unreadable.
    """
    return pathlib.Path(path).read_text(encoding='utf-8')


def write_text(path: PathLike, text: str) -> None:
    """Write a UTF-8 text file, replacing any existing content.

    The text is encoded before the file is opened, so an encoding error leaves
    an existing file untouched.

    Raises:
        UnicodeEncodeError: If text cannot be encoded as UTF-8.
        OSError: If the file or its directory cannot be written.
    """
    data = text.encode('utf-8')
    with pathlib.Path(path).open('wb') as f:
        f.write(data)


def exists(path: PathLike) -> bool:
    return pathlib.Path(path).exists()


def create_dir(path: PathLike) -> None:
    """Create a directory and its parents if missing."""
    p = pathlib.Path(path)
    if not p.exists():
        logging.debug(f'Creating directory: {p}')
    p.mkdir(parents=True, exist_ok=True)


def open_file_dialog(
        parent: Optional[QtWidgets.QWidget] = None,
        caption: str = 'Open',
        multiple: bool = False,
        filters: Optional[List[str]] = None,
        directory: str = '',
) -> List[pathlib.Path]:
    """Show a native open-file picker.

    Returns:
        The chosen paths; empty when the user cancels.
    """
    filter_str = ';;'.join(filters or [JSON_FILTER, ALL_FILTER])
    if multiple:
        paths, _ = QtWidgets.QFileDialog.getOpenFileNames(parent, caption, directory, filter_str)
    else:
        path, _ = QtWidgets.QFileDialog.getOpenFileName(parent, caption, directory, filter_str)
        paths = [path] if path else []
    return [pathlib.Path(p) for p in paths]


def save_file_dialog(
        parent: Optional[QtWidgets.QWidget] = None,
        caption: str = 'Save',
        filters: Optional[List[str]] = None,
        directory: str = '',
) -> Optional[pathlib.Path]:
    """Show a native save-file picker.

    Returns:
        The chosen path or None when the user cancels.
    """
    filter_str = ';;'.join(filters or [JSON_FILTER, ALL_FILTER])
    path, _ = QtWidgets.QFileDialog.getSaveFileName(parent, caption, directory, filter_str)
    return pathlib.Path(path) if path else None
