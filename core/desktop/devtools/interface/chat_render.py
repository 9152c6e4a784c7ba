"""Boxed chat bubbles for the terminal.

Layout is computed as plain text lines (``render_bubble``) so it can be
tested without a terminal; ``chat_bubble`` / ``trace_bubble`` print those
lines with prompt_toolkit styles.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, TextIO

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText

from core.desktop.devtools.interface.chat_themes import DEFAULT_THEME, build_style
from core.desktop.devtools.interface.i18n import translate
from util.display import display_width, pad_display, wrap_display


ChatBubbleRole = Literal["user", "assistant", "tool", "loading", "error", "success", "warning"]
TraceEventKind = Literal["tool", "agent", "generation", "trace"]

MOVE_UP = "\x1b[A"
CLEAR_LINE = "\x1b[2K"

# (top-left, top-right, bottom-left, bottom-right, horizontal, vertical)
BORDERS: Dict[str, tuple] = {
    "round": ("╭", "╮", "╰", "╯", "─", "│"),
    "single": ("┌", "┐", "└", "┘", "─", "│"),
    "classic": ("+", "+", "+", "+", "-", "|"),
}


@dataclass(frozen=True)
class BubbleStyle:
    title_key: str
    style_class: str
    border: str = "round"
    title_align: str = "left"
    float: str = "left"
    padding_x: int = 1
    padding_y: int = 1
    margin_y: int = 1
    text_align: str = "left"


ROLE_STYLES: Dict[str, BubbleStyle] = {
    "user": BubbleStyle("BUBBLE_USER", "class:bubble.user", title_align="right", float="right"),
    "assistant": BubbleStyle("BUBBLE_ASSISTANT", "class:bubble.assistant"),
    "tool": BubbleStyle("BUBBLE_TOOL", "class:bubble.tool", border="classic", title_align="center"),
    "loading": BubbleStyle("BUBBLE_LOADING", "class:bubble.loading", border="classic", title_align="center"),
    "error": BubbleStyle("BUBBLE_ERROR", "class:bubble.error", border="classic"),
    "success": BubbleStyle("BUBBLE_SUCCESS", "class:bubble.success", border="classic"),
    "warning": BubbleStyle("BUBBLE_WARNING", "class:bubble.warning"),
}

TRACE_TITLES: Dict[str, str] = {
    "tool": "🔧 tool",
    "agent": "🤖 agent",
    "generation": "💭 llm",
    "trace": "📋 trace",
}


def _trace_style(kind: str) -> BubbleStyle:
    return BubbleStyle(
        title_key="",
        style_class=f"class:trace.{kind if kind in TRACE_TITLES else 'trace'}",
        border="single",
        title_align="left",
        float="right",
        padding_x=1,
        padding_y=0,
        margin_y=0,
        text_align="right",
    )


def get_terminal_width() -> int:
    """Get current terminal width, default to 100 if unavailable."""
    try:
        return os.get_terminal_size().columns
    except (AttributeError, ValueError, OSError):
        return 100


def _title_bar(title: str, inner_width: int, align: str, horizontal: str) -> str:
    label = f" {title} " if title else ""
    label_width = display_width(label)
    if not label or label_width > inner_width - 2:
        return horizontal * inner_width
    if align == "right":
        left = inner_width - label_width - 1
    elif align == "center":
        left = (inner_width - label_width) // 2
    else:
        left = 1
    right = inner_width - label_width - left
    return horizontal * left + label + horizontal * right


def render_box(message: str, style: BubbleStyle, title: str, width: int) -> List[str]:
    """Lay out ``message`` in a bordered box. Returns lines without margins or float offset."""
    tl, tr, bl, br, hz, vt = BORDERS.get(style.border, BORDERS["round"])
    frame = 2 + 2 * style.padding_x
    max_content = max(1, width - frame)
    body = wrap_display(message, max_content)
    content_width = max([display_width(line) for line in body] + [1])
    # room for the title in the top border
    content_width = max(content_width, min(display_width(title) + 4 - 2 * style.padding_x, max_content))
    inner_width = content_width + 2 * style.padding_x

    pad = " " * style.padding_x
    blank = f"{vt}{' ' * inner_width}{vt}"
    lines = [f"{tl}{_title_bar(title, inner_width, style.title_align, hz)}{tr}"]
    lines.extend([blank] * style.padding_y)
    for line in body:
        lines.append(f"{vt}{pad}{pad_display(line, content_width, style.text_align)}{pad}{vt}")
    lines.extend([blank] * style.padding_y)
    lines.append(f"{bl}{hz * inner_width}{br}")
    return lines


def _place(lines: List[str], style: BubbleStyle, width: int) -> List[str]:
    margin_x = 1
    placed: List[str] = []
    for line in lines:
        if style.float == "right":
            offset = max(margin_x, width - display_width(line) - margin_x)
        else:
            offset = margin_x
        placed.append(" " * offset + line)
    blank: List[str] = [""] * style.margin_y
    return blank + placed + blank


def render_bubble(message: str, role: ChatBubbleRole, width: Optional[int] = None) -> List[str]:
    """Full chat bubble (margins and float offset included) as plain lines."""
    width = width or get_terminal_width()
    style = ROLE_STYLES.get(role, ROLE_STYLES["assistant"])
    box = render_box(message, style, translate(style.title_key), max(10, width - 2))
    return _place(box, style, width)


def render_trace_bubble(message: str, kind: TraceEventKind, width: Optional[int] = None) -> List[str]:
    width = width or get_terminal_width()
    style = _trace_style(kind)
    title = TRACE_TITLES.get(kind, TRACE_TITLES["trace"])
    box = render_box(message, style, title, max(10, width - 2))
    return _place(box, style, width)


class BubbleHandle:
    """Owned handle to a printed bubble; ``remove`` erases it once."""

    def __init__(self, line_count: int, stream: Optional[TextIO] = None):
        self.line_count = line_count
        self.stream = stream
        self.removed = False

    def remove(self) -> None:
        if self.removed:
            return
        self.removed = True
        stream = self.stream or sys.stdout
        stream.write((MOVE_UP + CLEAR_LINE) * self.line_count)
        stream.flush()


def _print_lines(lines: List[str], style_class: str, theme: str, output: Optional[TextIO]) -> None:
    fragments = [(style_class, line + "\n") for line in lines]
    kwargs = {"style": build_style(theme), "end": ""}
    if output is not None:
        kwargs["file"] = output
    print_formatted_text(FormattedText(fragments), **kwargs)


def chat_bubble(
    message: str,
    role: ChatBubbleRole,
    *,
    theme: str = DEFAULT_THEME,
    width: Optional[int] = None,
    output: Optional[TextIO] = None,
) -> BubbleHandle:
    lines = render_bubble(message, role, width)
    _print_lines(lines, ROLE_STYLES.get(role, ROLE_STYLES["assistant"]).style_class, theme, output)
    return BubbleHandle(len(lines), output)


def trace_bubble(
    message: str,
    kind: TraceEventKind,
    *,
    theme: str = DEFAULT_THEME,
    width: Optional[int] = None,
    output: Optional[TextIO] = None,
) -> None:
    lines = render_trace_bubble(message, kind, width)
    _print_lines(lines, _trace_style(kind).style_class, theme, output)


__all__ = [
    "BubbleHandle",
    "BubbleStyle",
    "ROLE_STYLES",
    "chat_bubble",
    "trace_bubble",
    "render_box",
    "render_bubble",
    "render_trace_bubble",
    "get_terminal_width",
]
