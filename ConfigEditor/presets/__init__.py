"""Presets subpackage: the named collection of JSON configuration payloads.

This package provides:
    - lib: the ordered preset store and its naming policy
    - model: Qt model listing presets in store order
    - view: Qt views and dock widget for interacting with presets in the UI
"""
