"""Interactive terminal checklist."""

from checklist.state import AppState, TextInput, View, default_state

__all__ = ["AppState", "TextInput", "View", "default_state"]
