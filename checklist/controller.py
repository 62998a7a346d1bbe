"""Key-driven state machine for the checklist."""

from __future__ import annotations

from common.config import ChecklistConfig
from common.logging_setup import get_logger
from checklist.state import AppState, TextInput, View, default_state
from storage.adapter import PersistenceAdapter

logger = get_logger(__name__)

QUIT_KEYS = {"ctrl+c"}
LIST_QUIT_KEYS = {"q"}


class Controller:
    """Owns AppState, applies key events, and saves after each one.

    Storage failures raised by the adapter are not caught here; they end
    the session in the run loop.
    """

    def __init__(self, adapter: PersistenceAdapter, config: ChecklistConfig | None = None) -> None:
        config = config or ChecklistConfig()
        self.adapter = adapter
        self.text_input = TextInput(
            placeholder=config.placeholder,
            char_limit=config.char_limit,
            width=config.input_width,
        )
        restored = adapter.load()
        if restored is None:
            self.state = default_state()
            logger.info("Starting with default checklist")
        else:
            self.state = restored
            # A restored session always opens on the list.
            self.state.view = View.LIST

    def handle_key(self, key: str) -> bool:
        """Apply one key event.

        Returns False when the key asks to quit, True otherwise.
        """
        if not self.state.view:
            self.state.view = View.LIST
        if key in QUIT_KEYS:
            return False
        if self.state.view == View.LIST and key in LIST_QUIT_KEYS:
            return False

        if self.state.view == View.LIST:
            self._handle_list_key(key)
        elif self.state.view == View.ADD:
            self._handle_add_key(key)
        else:
            raise ValueError(f"Unknown view: {self.state.view!r}")

        self.adapter.save(self.state)
        return True

    def _handle_list_key(self, key: str) -> None:
        state = self.state
        if key == "a":
            state.view = View.ADD
            return
        if not state.items:
            return
        if key in {"up", "k"}:
            move_up(state)
        elif key in {"down", "j"}:
            move_down(state)
        elif key == "d":
            delete_current(state)
        elif key in {"enter", " "}:
            toggle_current(state)

    def _handle_add_key(self, key: str) -> None:
        text_input = self.text_input
        if key == "enter":
            add_item(self.state, text_input.value)
            text_input.reset()
        elif key == "esc":
            text_input.reset()
            self.state.view = View.LIST
        elif key == "tab":
            self.state.view = View.LIST
        elif key == "backspace":
            text_input.backspace()
        elif key == "delete":
            text_input.delete()
        elif key == "left":
            text_input.move_left()
        elif key == "right":
            text_input.move_right()
        elif key == "home":
            text_input.home()
        elif key == "end":
            text_input.end()
        elif len(key) == 1 and key.isprintable():
            text_input.insert(key)


def move_up(state: AppState) -> None:
    if not state.items:
        return
    if state.cursor > 0:
        state.cursor -= 1
    else:
        state.cursor = len(state.items) - 1


def move_down(state: AppState) -> None:
    if not state.items:
        return
    if state.cursor < len(state.items) - 1:
        state.cursor += 1
    else:
        state.cursor = 0


def toggle_current(state: AppState) -> None:
    if not state.items:
        return
    if state.cursor in state.selected:
        state.selected.discard(state.cursor)
    else:
        state.selected.add(state.cursor)


def delete_current(state: AppState) -> None:
    """Remove the row under the cursor and reconcile cursor and selection.

    Selection is positional: marks on later rows keep their index, and any
    index left past the end of the list is dropped.
    """
    if not state.items:
        return
    removed = state.cursor
    del state.items[removed]
    state.selected.discard(removed)
    state.selected = {index for index in state.selected if index < len(state.items)}
    if state.cursor == len(state.items):
        state.cursor -= 1


def add_item(state: AppState, label: str) -> None:
    """Append ``label``, point the cursor at it, and return to the list."""
    state.items.append(label)
    state.cursor = len(state.items) - 1
    # No-op while selected stays within range; clears a stale mark on the new
    # row rather than unmarking the row the cursor left.
    state.selected.discard(state.cursor)
    state.view = View.LIST
