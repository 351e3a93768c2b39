"""
Editor package: the JSON text editor widget.

- :mod:`ConfigEditor.editor.json_widget` – Draft editing, commit and publish controls.
"""
