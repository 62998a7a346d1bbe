"""Unit tests for checklist rendering."""

import io
import sys
from pathlib import Path

from rich.console import Console
from rich.layout import Layout
from rich.panel import Panel
from rich.text import Text

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from checklist.render import (
    ACTIVE_BORDER,
    ADD_PROMPT,
    INACTIVE_BORDER,
    create_gradient_text,
    render_add_view,
    render_footer,
    render_list_view,
    render_text_input,
    render_ui,
)
from checklist.state import AppState, TextInput, View
from storage.codec import encode_state


def _to_text(renderable, width: int = 60) -> str:
    console = Console(file=io.StringIO(), width=width, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


def _row_panels(state: AppState) -> list:
    return [r for r in render_list_view(state).renderables if isinstance(r, Panel)]


def test_list_view_numbers_rows() -> None:
    state = AppState(items=["Do a thing", "do another thing"], cursor=0)

    output = _to_text(render_list_view(state))

    assert "Tasks:" in output
    assert "1. Do a thing" in output
    assert "2. do another thing" in output


def test_list_view_highlights_cursor_row() -> None:
    state = AppState(items=["a", "b", "c"], cursor=1)

    panels = _row_panels(state)

    assert [p.border_style for p in panels] == [INACTIVE_BORDER, ACTIVE_BORDER, INACTIVE_BORDER]


def test_list_view_strikes_selected_rows() -> None:
    state = AppState(items=["a", "b"], cursor=0, selected={1})

    panels = _row_panels(state)

    def struck(panel: Panel) -> bool:
        text = panel.renderable
        return any(str(span.style) == "strike" for span in text.spans)

    assert struck(panels[0]) is False
    assert struck(panels[1]) is True


def test_list_view_empty_hint() -> None:
    output = _to_text(render_list_view(AppState(items=[], cursor=-1)))

    assert "No tasks yet" in output


def test_render_does_not_mutate_state() -> None:
    state = AppState(items=["a", "b"], cursor=1, selected={0}, view=View.LIST)
    text_input = TextInput()
    text_input.insert("draft")
    before = encode_state(state)

    _to_text(render_ui(state, text_input))
    _to_text(render_ui(AppState(items=["a"], cursor=0, view=View.ADD), text_input))

    assert encode_state(state) == before
    assert text_input.value == "draft"


def test_add_view_shows_prompt_and_buffer() -> None:
    text_input = TextInput()
    text_input.insert("Buy milk")

    output = _to_text(render_add_view(text_input))

    assert ADD_PROMPT in output
    assert "Buy milk" in output


def test_text_input_placeholder_when_empty() -> None:
    text = render_text_input(TextInput(placeholder="Do the thing"))

    assert "Do the thing" in text.plain
    assert any("dim" in str(span.style) for span in text.spans)


def test_text_input_caret_is_reversed() -> None:
    text_input = TextInput()
    text_input.insert("abc")
    text_input.move_left()

    text = render_text_input(text_input)

    assert text.plain == "> abc"
    reversed_spans = [s for s in text.spans if str(s.style) == "reverse"]
    assert len(reversed_spans) == 1
    assert text.plain[reversed_spans[0].start:reversed_spans[0].end] == "c"


def test_text_input_caret_at_end_adds_cell() -> None:
    text_input = TextInput()
    text_input.insert("abc")

    assert render_text_input(text_input).plain == "> abc "


def test_text_input_scrolls_long_values() -> None:
    text_input = TextInput(width=5)
    text_input.insert("abcdefgh")

    assert render_text_input(text_input).plain == "> efgh "


def test_footer_hints_follow_view() -> None:
    list_footer = render_footer(AppState(items=["a"], cursor=0, view=View.LIST)).plain
    add_footer = render_footer(AppState(items=["a"], cursor=0, view=View.ADD)).plain

    assert "to delete" in list_footer
    assert "to cancel" in add_footer
    assert "Ctrl+C" in list_footer and "Ctrl+C" in add_footer


def test_render_ui_returns_layout() -> None:
    layout = render_ui(AppState(items=["a"], cursor=0), TextInput())

    assert isinstance(layout, Layout)
    assert "1. a" in _to_text(layout["body"].renderable)


def test_gradient_text_keeps_characters() -> None:
    text = create_gradient_text("CHECK", "#00ffff", "#0033ff")

    assert isinstance(text, Text)
    assert text.plain == "CHECK"
    assert create_gradient_text("", "#000000", "#ffffff").plain == ""
