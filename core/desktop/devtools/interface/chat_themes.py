#!/usr/bin/env python3
"""Chat themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "dark-olive": {
        "": "#d7dfe6",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9 italic",
        "banner": "bg:#00afaf #000000 bold",
        "bubble.user": "#61afef",
        "bubble.assistant": "#9ad974",
        "bubble.tool": "#e5c07b",
        "bubble.loading": "#6d717a",
        "bubble.error": "#e06c75 bold",
        "bubble.success": "#9ad974 bold",
        "bubble.warning": "#f9ac60",
        "trace.tool": "#b59a5c italic",
        "trace.agent": "#56b6c2 italic",
        "trace.generation": "#6d717a italic",
        "trace.trace": "#6d717a italic",
        "prompt.border": "#4b525a",
        "prompt.caret": "#ffb347 bold",
    },
    "dark-contrast": {
        "": "#e8eaec",
        "text": "#e8eaec",
        "text.dim": "#a7b0ba italic",
        "banner": "bg:#00d7d7 #000000 bold",
        "bubble.user": "#82c4ff bold",
        "bubble.assistant": "#b8f171 bold",
        "bubble.tool": "#f0c674",
        "bubble.loading": "#8a9097",
        "bubble.error": "#ff6b6b bold",
        "bubble.success": "#b8f171 bold",
        "bubble.warning": "#f0c674 bold",
        "trace.tool": "#d8b46a italic",
        "trace.agent": "#66d9e8 italic",
        "trace.generation": "#8a9097 italic",
        "trace.trace": "#8a9097 italic",
        "prompt.border": "#5a6169",
        "prompt.caret": "#ffb347 bold",
    },
}

DEFAULT_THEME = "dark-olive"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str = DEFAULT_THEME) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)
