"""Status package: enums and exceptions for reporting command outcomes.

This package defines:
    - Status: a StrEnum of possible failure states
    - STATUS_MESSAGE: default user-facing messages per status
    - get_message: helper to retrieve messages for statuses
    - BaseStatusException: base exception for status-driven error handling
    - ValidationError, NotFoundError, FileIOError: the three failure families
"""
