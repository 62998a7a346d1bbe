"""Checklist state: the persisted AppState and the transient text input."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_ITEMS = ["Do a thing", "do another thing"]
DEFAULT_PLACEHOLDER = "Do the thing"
DEFAULT_CHAR_LIMIT = 156
DEFAULT_INPUT_WIDTH = 20


class View(str, Enum):
    """Interaction modes of the checklist."""

    LIST = "list"
    ADD = "add"


@dataclass
class AppState:
    """Persisted checklist data.

    Attributes:
        items: Task labels in display order.
        cursor: Index of the highlighted row, -1 when there are no rows.
        selected: Indexes of rows marked done.
        view: Active interaction mode.
    """

    items: list[str] = field(default_factory=list)
    cursor: int = 0
    selected: set[int] = field(default_factory=set)
    view: View = View.LIST

    def has_rows(self) -> bool:
        return len(self.items) > 0

    def check_invariants(self) -> None:
        """Raise ValueError if cursor or selection point outside ``items``."""
        count = len(self.items)
        if count and not 0 <= self.cursor < count:
            raise ValueError(f"cursor {self.cursor} out of range for {count} items")
        stale = sorted(index for index in self.selected if not 0 <= index < count)
        if stale:
            raise ValueError(f"selected indexes {stale} out of range for {count} items")


def default_state() -> AppState:
    """State used on the very first run."""
    return AppState(items=list(DEFAULT_ITEMS), cursor=0, selected=set(), view=View.LIST)


class TextInput:
    """Single-line editable buffer with a caret.

    Never persisted; the controller builds a fresh one on every start.
    """

    def __init__(
        self,
        placeholder: str = DEFAULT_PLACEHOLDER,
        char_limit: int = DEFAULT_CHAR_LIMIT,
        width: int = DEFAULT_INPUT_WIDTH,
    ) -> None:
        self.placeholder = placeholder
        self.char_limit = char_limit
        self.width = width
        self._value = ""
        self._caret = 0

    @property
    def value(self) -> str:
        return self._value

    @property
    def caret(self) -> int:
        return self._caret

    def insert(self, text: str) -> None:
        text = "".join(ch for ch in text if ch.isprintable())
        if self.char_limit > 0:
            room = self.char_limit - len(self._value)
            if room <= 0:
                return
            text = text[:room]
        self._value = self._value[: self._caret] + text + self._value[self._caret :]
        self._caret += len(text)

    def backspace(self) -> None:
        if self._caret == 0:
            return
        self._value = self._value[: self._caret - 1] + self._value[self._caret :]
        self._caret -= 1

    def delete(self) -> None:
        if self._caret >= len(self._value):
            return
        self._value = self._value[: self._caret] + self._value[self._caret + 1 :]

    def move_left(self) -> None:
        self._caret = max(0, self._caret - 1)

    def move_right(self) -> None:
        self._caret = min(len(self._value), self._caret + 1)

    def home(self) -> None:
        self._caret = 0

    def end(self) -> None:
        self._caret = len(self._value)

    def reset(self) -> None:
        self._value = ""
        self._caret = 0

    def visible_window(self) -> tuple[str, int]:
        """Return the slice of the value shown in ``width`` columns and the caret offset within it."""
        if self.width <= 0 or len(self._value) < self.width:
            return self._value, self._caret
        # One column is kept free for the caret at the end of the line.
        span = self.width - 1 if self._caret == len(self._value) else self.width
        start = max(0, min(self._caret - span + 1, len(self._value) - span))
        return self._value[start : start + span], self._caret - start
