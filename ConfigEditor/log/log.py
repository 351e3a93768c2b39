"""Logging setup for ConfigEditor.

Records go to the root logger. A :class:`TankHandler` keeps the most recent
ones in memory for the log dock, and Qt's own messages are routed through
the ``Qt`` logger.
"""
import collections
import logging
import sys
from typing import Deque, List, NamedTuple, Optional

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

from ..ui.actions import signals

LOG_LEVEL = logging.DEBUG
LOG_FORMAT = '[%(asctime)s] <%(module)s> %(levelname)s:  %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'

# Oldest entries are dropped once the tank is full
MAX_ENTRIES = 2000

LEVELS = (
    logging.DEBUG,
    logging.INFO,
    logging.WARNING,
    logging.ERROR,
    logging.CRITICAL,
)

QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


class LogEntry(NamedTuple):
    level: int
    module: str
    message: str


def set_logging_level(level: int) -> None:
    """Apply one of the standard logging levels to the root logger and its handlers.

    Raises:
        ValueError: If level is not a standard logging level.
    """
    if isinstance(level, bool) or level not in LEVELS:
        raise ValueError(f'{level!r} is not a standard logging level, e.g. logging.DEBUG.')

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def qt_message_handler(mode, context, message: str) -> None:
    """Forward a Qt message to the ``Qt`` logger. A fatal message exits the process."""
    level = QT_LEVELS.get(mode, logging.WARNING)
    logging.getLogger('Qt').log(level, message.strip())
    if mode == QtMsgType.QtFatalMsg:
        sys.exit(1)


def setup_logging(enable_stream_handler: bool = True,
                  enable_qt_handler: bool = True,
                  log_level: int = LOG_LEVEL) -> None:
    """Replace the root logger's handlers with ConfigEditor's.

    Args:
        enable_stream_handler: Also print records to stdout.
        enable_qt_handler: Route Qt's own messages through the 'Qt' logger.
        log_level: Level applied to the root logger and every handler.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers: List[logging.Handler] = [TankHandler()]
    if enable_stream_handler:
        handlers.insert(0, logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    set_logging_level(log_level)

    if enable_qt_handler:
        qInstallMessageHandler(qt_message_handler)


def get_handler() -> Optional['TankHandler']:
    """Return the TankHandler installed on the root logger, if any."""
    return next(
        (h for h in logging.getLogger().handlers if isinstance(h, TankHandler)),
        None
    )


class TankHandler(logging.Handler):
    """Keeps the latest formatted records for the log dock.

    An ERROR or CRITICAL record emits ``signals.showLogs`` so the dock opens.

    Attributes:
        tank (collections.deque[LogEntry]): At most ``max_entries`` entries, oldest first.
    """

    def __init__(self, max_entries: int = MAX_ENTRIES) -> None:
        super().__init__()
        self.tank: Deque[LogEntry] = collections.deque(maxlen=max_entries)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.tank.append(LogEntry(record.levelno, record.module, self.format(record)))
        except Exception:
            self.handleError(record)
            return
        if record.levelno >= logging.ERROR:
            signals.showLogs.emit()

    def get_logs(self, level: int = logging.NOTSET) -> List[str]:
        """Formatted messages at or above level, oldest first."""
        return [entry.message for entry in self.tank if entry.level >= level]

    def clear_logs(self) -> None:
        self.tank.clear()
