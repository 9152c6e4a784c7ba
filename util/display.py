"""Text width helpers with proper Unicode (wide/emoji) width handling."""

from typing import List

from wcwidth import wcwidth


def display_width(text: str) -> int:
    """Return visual width of text accounting for wide/narrow characters."""
    width = 0
    for ch in text:
        w = wcwidth(ch)
        if w is None:
            w = 0
        width += max(0, w)
    return width


def trim_display(text: str, width: int) -> str:
    """Trim text so visible width doesn't exceed specified width."""
    acc = []
    used = 0
    for ch in text:
        w = wcwidth(ch) or 0
        if w < 0:
            w = 0
        if used + w > width:
            break
        acc.append(ch)
        used += w
    return "".join(acc)


def pad_display(text: str, width: int, align: str = "left") -> str:
    """Trim and pad with spaces to exact visible width."""
    trimmed = trim_display(text, width)
    gap = width - display_width(trimmed)
    if gap <= 0:
        return trimmed
    if align == "right":
        return " " * gap + trimmed
    if align == "center":
        left = gap // 2
        return " " * left + trimmed + " " * (gap - left)
    return trimmed + " " * gap


def wrap_display(text: str, width: int) -> List[str]:
    """Wrap text on word boundaries into lines of at most ``width`` visible columns.

    Explicit newlines are kept; words longer than the width are split.
    """
    width = max(1, width)
    lines: List[str] = []
    for raw_line in text.split("\n"):
        current = ""
        for word in raw_line.split(" "):
            candidate = f"{current} {word}" if current else word
            if display_width(candidate) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            while display_width(word) > width:
                head = trim_display(word, width)
                if not head:
                    # single glyph wider than the box
                    head = word[0]
                lines.append(head)
                word = word[len(head):]
            current = word
        lines.append(current)
    return lines


__all__ = ["display_width", "trim_display", "pad_display", "wrap_display"]
