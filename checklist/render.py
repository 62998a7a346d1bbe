"""Rendering of checklist frames with rich.

Every function here is a pure function of the state it is given.
"""

from __future__ import annotations

from rich.align import Align
from rich.box import ROUNDED
from rich.console import Group, RenderableType
from rich.layout import Layout
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from checklist.state import AppState, TextInput, View

CHECKLIST_TITLE = "CHECKLIST"
ACTIVE_BORDER = "color(86)"
INACTIVE_BORDER = "color(12)"
ADD_PROMPT = "What's the task?"


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Convert a hex color string like '#rrggbb' or 'rrggbb' to an (r, g, b) tuple."""
    color = color.lstrip("#")
    if len(color) != 6:
        return (255, 255, 255)
    try:
        r = int(color[0:2], 16)
        g = int(color[2:4], 16)
        b = int(color[4:6], 16)
    except ValueError:
        return (255, 255, 255)
    return (r, g, b)


def _interpolate_rgb(
    start: tuple[int, int, int],
    end: tuple[int, int, int],
    ratio: float,
) -> tuple[int, int, int]:
    """Linearly interpolate between two RGB colors."""
    ratio = max(0.0, min(1.0, ratio))
    sr, sg, sb = start
    er, eg, eb = end
    return (
        int(sr + (er - sr) * ratio),
        int(sg + (eg - sg) * ratio),
        int(sb + (eb - sb) * ratio),
    )


def create_gradient_text(text: str, start_color: str, end_color: str) -> Text:
    """Create text whose characters fade from one color to another."""
    result = Text()
    if not text:
        return result
    start_rgb = _hex_to_rgb(start_color)
    end_rgb = _hex_to_rgb(end_color)
    last = max(1, len(text) - 1)
    for index, ch in enumerate(text):
        r, g, b = _interpolate_rgb(start_rgb, end_rgb, index / last)
        result.append(ch, style=Style(color=f"#{r:02x}{g:02x}{b:02x}", bold=True))
    return result


def create_ui_layout() -> Layout:
    """Create the main UI layout."""
    layout = Layout()

    layout.split_column(
        Layout(name="header", size=3),
        Layout(name="body"),
        Layout(name="footer", size=2),
    )

    return layout


def render_ui(state: AppState, text_input: TextInput) -> Layout:
    """Render a full frame for the current view."""
    layout = create_ui_layout()

    title = create_gradient_text(CHECKLIST_TITLE, "#00ffff", "#0033ff")
    layout["header"].update(Align.center(title, vertical="middle"))
    layout["body"].update(render_body(state, text_input))
    layout["footer"].update(Align.center(render_footer(state), vertical="bottom"))

    return layout


def render_body(state: AppState, text_input: TextInput) -> RenderableType:
    if state.view == View.ADD:
        return render_add_view(text_input)
    if state.view == View.LIST:
        return render_list_view(state)
    raise ValueError(f"Unknown view: {state.view!r}")


def render_list_view(state: AppState) -> RenderableType:
    """One bordered row per task, the cursor row highlighted, done rows struck through."""
    rows: list[RenderableType] = [Text("Tasks:\n", style="bold cyan")]
    if not state.items:
        rows.append(Text("No tasks yet. Press a to add one.", style="dim"))
        return Group(*rows)
    for index, label in enumerate(state.items):
        item = Text(f"{index + 1}. {label}")
        if index in state.selected:
            item.stylize("strike")
        border = ACTIVE_BORDER if index == state.cursor else INACTIVE_BORDER
        rows.append(
            Panel(
                item,
                box=ROUNDED,
                border_style=border,
                padding=(0, 1),
                expand=False,
            )
        )
    return Group(*rows)


def render_add_view(text_input: TextInput) -> RenderableType:
    return Group(
        Text(f"{ADD_PROMPT}\n", style="bold cyan"),
        render_text_input(text_input),
    )


def render_text_input(text_input: TextInput) -> Text:
    """Render the buffer with a block caret, or the dimmed placeholder when empty."""
    text = Text("> ", style="bold white")
    if not text_input.value:
        placeholder = text_input.placeholder or " "
        text.append(placeholder[0], style="reverse dim")
        text.append(placeholder[1:], style="dim")
        return text
    window, caret = text_input.visible_window()
    text.append(window[:caret])
    text.append(window[caret:caret + 1] or " ", style="reverse")
    text.append(window[caret + 1:])
    return text


def render_footer(state: AppState) -> Text:
    text = Text()
    text.append("Ctrl+C", style="bold white")
    text.append(" to exit", style="dim")
    text.append(" | ", style="dim")
    if state.view == View.LIST:
        text.append("j/k", style="bold white")
        text.append(" to move, ", style="dim")
        text.append("Enter/Space", style="bold white")
        text.append(" to toggle, ", style="dim")
        text.append("a", style="bold white")
        text.append(" to add, ", style="dim")
        text.append("d", style="bold white")
        text.append(" to delete, ", style="dim")
        text.append("q", style="bold white")
        text.append(" to quit", style="dim")
    elif state.view == View.ADD:
        text.append("Enter", style="bold white")
        text.append(" to save, ", style="dim")
        text.append("Esc", style="bold white")
        text.append(" to cancel, ", style="dim")
        text.append("Tab", style="bold white")
        text.append(" to list", style="dim")
    return text
