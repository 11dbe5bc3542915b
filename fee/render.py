"""Renderer for the directory listing.

Each frame is composed in full and written with one ``os.write``: clear the
screen, draw the visible slice of the listing, draw the status row, then
reset colors and home the cursor. There is no incremental diffing.
"""

from __future__ import annotations

import os
import sys

from .ansi import (
    CLEAR_SCREEN,
    CURSOR_HOME,
    RESET,
    REVERSE,
    SELECTED_ROW,
    clip_to_width,
    display_width,
    foreground_rgb,
    move_to,
    printable,
)
from .config import Config
from .navigation import NavigationState


def build_status_line(left_text: str, width: int, right_text: str) -> str:
    usable = max(1, width - 1)
    right_width = display_width(right_text)
    if usable <= right_width:
        return clip_to_width(right_text, usable)
    left = clip_to_width(left_text, max(0, usable - right_width - 1))
    gap = " " * (usable - display_width(left) - right_width)
    return f"{left}{gap}{right_text}"


def position_label(state: NavigationState) -> str:
    count = len(state.listing)
    if count == 0:
        return "0/0"
    return f"{state.selection + 1}/{count}"


def build_frame(state: NavigationState, height: int, width: int, config: Config) -> str:
    """Compose one full frame for ``state`` in a ``width`` x ``height + 1`` screen.

    Rows ``scroll .. scroll + height`` of the listing go to screen rows
    ``0 .. height``; indices past the end of the listing are skipped. Row
    ``height`` holds the status line.
    """
    dir_color = foreground_rgb(config.dir_color)
    file_color = foreground_rgb(config.file_color)
    out: list[str] = [RESET, CLEAR_SCREEN, CURSOR_HOME]

    for row in range(height):
        index = state.scroll + row
        if index >= len(state.listing):
            break
        entry = state.listing[index]
        name = clip_to_width(printable(entry.name), width)
        out.append(move_to(row))
        out.append(dir_color if entry.is_dir else file_color)
        if index == state.selection:
            out.append(SELECTED_ROW)
        out.append(name)
        out.append(RESET)

    status = build_status_line(printable(str(state.current_path)), width, position_label(state))
    out.append(move_to(height))
    out.append(REVERSE)
    out.append(status)
    out.append(RESET)
    out.append(CURSOR_HOME)
    return "".join(out)


def render_listing(state: NavigationState, height: int, width: int, config: Config) -> None:
    """Write a full frame for ``state`` to stdout."""
    frame = build_frame(state, height, width, config)
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))
