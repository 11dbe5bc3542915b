"""Browsing state and its transitions.

``NavigationState`` is immutable; every transition takes the current state
and returns the next one. Only the browser loop holds the live state.
Transitions that change directory call the injected lister and replace the
listing wholesale.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from .listing import Entry, Listing

ListDirectory = Callable[[Path], Listing]


@dataclass(frozen=True)
class NavigationState:
    current_path: Path
    listing: Listing
    selection: int = 0
    scroll: int = 0

    @property
    def selected_entry(self) -> Entry | None:
        if not self.listing:
            return None
        return self.listing[self.selection]

    @property
    def selected_path(self) -> Path | None:
        entry = self.selected_entry
        if entry is None:
            return None
        return self.current_path / entry.name


def last_page_scroll(count: int, height: int) -> int:
    """First row of the bottom page, saturating at zero for short listings."""
    return max(0, count - height)


def initial_state(path: Path, list_directory: ListDirectory) -> NavigationState:
    return NavigationState(current_path=path, listing=list_directory(path))


def move_up(state: NavigationState, height: int) -> NavigationState:
    """Select the previous entry, wrapping from the top to the last entry."""
    count = len(state.listing)
    if count == 0:
        return state
    if state.selection == 0:
        return replace(state, selection=count - 1, scroll=last_page_scroll(count, height))
    selection = state.selection - 1
    scroll = state.scroll
    if scroll > selection:
        scroll -= 1
    return replace(state, selection=selection, scroll=scroll)


def move_down(state: NavigationState, height: int) -> NavigationState:
    """Select the next entry, wrapping from the last entry back to the top."""
    count = len(state.listing)
    if count == 0:
        return state
    if state.selection >= count - 1:
        return replace(state, selection=0, scroll=0)
    selection = state.selection + 1
    scroll = state.scroll
    if selection - scroll >= height:
        scroll += 1
    return replace(state, selection=selection, scroll=scroll)


def enter_directory(state: NavigationState, list_directory: ListDirectory) -> NavigationState:
    """Descend into the selected directory; a no-op unless one is selected."""
    entry = state.selected_entry
    if entry is None or not entry.is_dir:
        return state
    target = state.current_path / entry.name
    return NavigationState(current_path=target, listing=list_directory(target))


def go_back(state: NavigationState, list_directory: ListDirectory) -> NavigationState:
    """Move to the parent directory. At the filesystem root nothing changes."""
    parent = state.current_path.parent
    if parent == state.current_path:
        return state
    return NavigationState(current_path=parent, listing=list_directory(parent))


def keep_selection_visible(state: NavigationState, height: int) -> NavigationState:
    """Clamp selection and scroll so ``scroll <= selection < scroll + height``.

    Needed after the terminal is resized; the move transitions already
    preserve the invariant for a fixed height.
    """
    height = max(1, height)
    count = len(state.listing)
    if count == 0:
        if state.selection == 0 and state.scroll == 0:
            return state
        return replace(state, selection=0, scroll=0)
    selection = min(max(0, state.selection), count - 1)
    scroll = state.scroll
    if selection < scroll:
        scroll = selection
    elif selection >= scroll + height:
        scroll = selection - height + 1
    scroll = max(0, scroll)
    if selection == state.selection and scroll == state.scroll:
        return state
    return replace(state, selection=selection, scroll=scroll)
