"""Core package: JSON documents, file access, and the editor session.

This package provides:
    - document: the tagged JSON value type
    - filesystem: path read/write helpers and native file pickers
    - session: the command surface the UI shell invokes
"""
