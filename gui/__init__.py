"""PySide6 editor front end."""
