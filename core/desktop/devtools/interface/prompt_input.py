"""Boxed prompt line for the chat loop."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText

from core.desktop.devtools.interface.chat_themes import DEFAULT_THEME, build_style
from core.desktop.devtools.interface.constants import PROMPT_BOX_WIDTH
from core.desktop.devtools.interface.i18n import translate

PROMPT_LINES = 2  # header + input line


def prompt_header(width: int = PROMPT_BOX_WIDTH) -> str:
    label = f"╭─ {translate('PROMPT_LABEL')} "
    return label + "─" * max(0, width - len(label) + 2) + "╮"


class PromptInput:
    def __init__(self, session: Optional[PromptSession] = None, theme: str = DEFAULT_THEME, stream: Optional[TextIO] = None):
        self.session = session or PromptSession(style=build_style(theme))
        self.stream = stream

    def _message(self) -> FormattedText:
        return FormattedText(
            [
                ("class:prompt.border", prompt_header() + "\n"),
                ("class:prompt.border", "│ "),
                ("class:prompt.caret", "> "),
            ]
        )

    def _erase(self) -> None:
        stream = self.stream or sys.stdout
        stream.write("\x1b[A\x1b[2K" * PROMPT_LINES)
        stream.flush()

    def ask(self) -> Optional[str]:
        """Read one message; ``None`` on Ctrl-D / Ctrl-C."""
        try:
            text = self.session.prompt(self._message())
        except (EOFError, KeyboardInterrupt):
            return None
        self._erase()
        return text


__all__ = ["PromptInput", "prompt_header", "PROMPT_LINES"]
