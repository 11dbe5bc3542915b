"""ANSI escape builders and display-width helpers for the listing renderer."""

from __future__ import annotations

import unicodedata

RESET = "\033[0m"
REVERSE = "\033[7m"
CLEAR_SCREEN = "\033[2J"
CURSOR_HOME = "\033[H"
SELECTED_ROW = "\033[48;2;255;255;255m\033[38;2;0;0;0m"


def move_to(row: int, col: int = 0) -> str:
    """Return a cursor move to zero-based ``(row, col)``."""
    return f"\033[{row + 1};{col + 1}H"


def foreground_rgb(color: tuple[int, int, int] | None) -> str:
    """24-bit foreground SGR for ``color``; ``None`` keeps the terminal default."""
    if color is None:
        return ""
    r, g, b = color
    return f"\033[38;2;{r};{g};{b}m"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def printable(text: str) -> str:
    """Replace control characters so a name cannot move the cursor."""
    return "".join("?" if unicodedata.category(ch) == "Cc" else ch for ch in text)


def clip_to_width(text: str, max_cols: int) -> str:
    """Trim plain text to at most ``max_cols`` display columns."""
    if max_cols <= 0:
        return ""
    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
    return "".join(out)


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)
