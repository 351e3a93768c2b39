"""Status definitions and exceptions for ConfigEditor.

This module provides:
    - Status: enumeration of possible command failure states
    - STATUS_MESSAGE: user-facing messages for each status
    - get_message: retrieve the message for a status
    - BaseStatusException: base exception carrying a Status
    - ValidationError, NotFoundError, FileIOError: failure families
    - Specific exceptions (e.g., DuplicateKeyException) raised by the store, gateway and session
"""
import enum
import logging
from typing import Dict


class Status(enum.StrEnum):
    """Enumeration of command failure codes."""
    UnknownStatus = enum.auto()
    Okay = enum.auto()

    # Validation status
    DuplicateKey = enum.auto()
    EmptyKey = enum.auto()
    InvalidShape = enum.auto()
    InvalidJson = enum.auto()

    # Precondition status
    NotFound = enum.auto()
    NoSelection = enum.auto()
    NoTarget = enum.auto()

    # File status
    PresetsWriteFailed = enum.auto()
    SettingsWriteFailed = enum.auto()
    TargetWriteFailed = enum.auto()
    ExportWriteFailed = enum.auto()
    FileReadFailed = enum.auto()


STATUS_MESSAGE: Dict[Status, str] = {
    Status.UnknownStatus: 'Unknown status.',
    Status.Okay: 'Everything is okay.',

    Status.DuplicateKey: 'A preset with this name already exists.',
    Status.EmptyKey: 'Preset names cannot be empty.',
    Status.InvalidShape: 'The document must be a JSON object.',
    Status.InvalidJson: 'The text is not valid JSON.',

    Status.NotFound: 'The preset could not be found.',
    Status.NoSelection: 'No preset is selected.',
    Status.NoTarget: 'No target config file is set. Please select a config file first.',

    Status.PresetsWriteFailed: 'Could not save the presets file. Changes are kept in memory.',
    Status.SettingsWriteFailed: 'Could not save the editor settings. Changes are kept in memory.',
    Status.TargetWriteFailed: 'Could not write the target config file.',
    Status.ExportWriteFailed: 'Could not export the config set.',
    Status.FileReadFailed: 'Could not read the file.',
}


def get_message(status: Status) -> str:
    """
    Get the message for a given status.

    Args:
        status (Status): The status enum.

    Returns:
        str: The message associated with the status.
    """
    return STATUS_MESSAGE.get(status, 'Unknown status')


class BaseStatusException(Exception):
    """Base exception for status-based errors in ConfigEditor.

    Attributes:
        status (Status): Status code associated with this error.
        status_message (str): User-facing message for the status.
        level (int): Logging level used when the exception is created.

    Args:
        message (str): Optional additional context for the error.
    """
    status = Status.UnknownStatus
    level = logging.ERROR

    def __init__(self, message: str = None):
        self.status_message = get_message(self.status)
        exception_message = f'{self.status_message} {message}' if message else self.status_message
        super().__init__(exception_message)

        logging.log(self.level, exception_message)

        from ..ui.actions import signals
        signals.error.emit(exception_message)


class UnknownException(BaseStatusException):
    """Exception for an unknown error during status processing."""
    pass


class ValidationError(BaseStatusException):
    """User-correctable input error. Never retried."""
    level = logging.WARNING


class NotFoundError(BaseStatusException):
    """A caller precondition was not met."""
    level = logging.WARNING


class FileIOError(BaseStatusException):
    """A file could not be read or written."""
    level = logging.ERROR


class DuplicateKeyException(ValidationError):
    """Exception raised when a rename would collide with an existing preset name."""
    status = Status.DuplicateKey


class EmptyKeyException(ValidationError):
    """Exception raised when a preset name is empty after trimming."""
    status = Status.EmptyKey


class InvalidShapeException(ValidationError):
    """Exception raised when a document is not a JSON object where one is required."""
    status = Status.InvalidShape


class InvalidJsonException(ValidationError):
    """Exception raised when text cannot be parsed as JSON."""
    status = Status.InvalidJson


class NotFoundException(NotFoundError):
    """Exception raised when a preset name is not in the store."""
    status = Status.NotFound


class NoSelectionException(NotFoundError):
    """Exception raised when a command needs a selected preset."""
    status = Status.NoSelection


class NoTargetException(NotFoundError):
    """Exception raised when publishing without a target path."""
    status = Status.NoTarget


class PresetsWriteException(FileIOError):
    """Exception raised when the presets file cannot be written."""
    status = Status.PresetsWriteFailed
    level = logging.WARNING


class SettingsWriteException(FileIOError):
    """Exception raised when the editor settings file cannot be written."""
    status = Status.SettingsWriteFailed
    level = logging.WARNING


class TargetWriteException(FileIOError):
    """Exception raised when the target config file cannot be written."""
    status = Status.TargetWriteFailed


class ExportWriteException(FileIOError):
    """Exception raised when a config set cannot be exported."""
    status = Status.ExportWriteFailed


class FileReadException(FileIOError):
    """Exception raised when a user-chosen file cannot be read."""
    status = Status.FileReadFailed
