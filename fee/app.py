"""Interactive browser loop.

Wires navigation state, rendering, key decoding, the terminal session and
editor handoff together. Feature logic lives in the pure navigation and
editor modules; this module only sequences them.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path

from . import navigation
from .config import Config
from .editor import build_editor_command, choose_editor_template, launch_editor
from .errors import FeeError
from .input import KeyAction, action_for_key, read_key
from .listing import list_directory
from .navigation import ListDirectory, NavigationState
from .render import render_listing
from .terminal import TerminalController
from .utf8_probe import is_text

logger = logging.getLogger(__name__)


class Browser:
    """Single-owner holder of the live :class:`NavigationState`.

    Collaborators are injected so the loop can run against a fake terminal
    and a scripted key source.
    """

    def __init__(
        self,
        start_path: Path,
        config: Config,
        terminal: TerminalController,
        *,
        read_next_key: Callable[[], str],
        list_directory: ListDirectory = list_directory,
        is_text: Callable[[Path], bool] = is_text,
        render: Callable[[NavigationState, int, int, Config], None] = render_listing,
        launch_editor: Callable[..., object] = launch_editor,
    ) -> None:
        self.start_path = start_path
        self.config = config
        self.terminal = terminal
        self.read_next_key = read_next_key
        self.list_directory = list_directory
        self.is_text = is_text
        self.render = render
        self.launch_editor = launch_editor
        self.state: NavigationState | None = None
        self.running = False

    def redraw(self) -> None:
        assert self.state is not None
        height = self.terminal.viewport_height()
        self.state = navigation.keep_selection_visible(self.state, height)
        self.render(self.state, height, self.terminal.size().columns, self.config)

    def open_selected_file(self) -> None:
        """Hand the selected file to the configured editor."""
        assert self.state is not None
        target = self.state.selected_path
        if target is None:
            return
        template = choose_editor_template(self.config, target, self.is_text)
        command = build_editor_command(template, target)
        self.launch_editor(
            command,
            self.config.wait_for_editor_exit,
            self.terminal.disable_tui_mode,
            self.terminal.enable_tui_mode,
        )

    def activate(self) -> None:
        assert self.state is not None
        entry = self.state.selected_entry
        if entry is None:
            return
        if entry.is_dir:
            self.state = navigation.enter_directory(self.state, self.list_directory)
        else:
            self.open_selected_file()

    def handle_key(self, key: str) -> None:
        """Apply one key to the state. Every key is followed by a redraw."""
        assert self.state is not None
        action = action_for_key(key)
        height = self.terminal.viewport_height()
        if action is KeyAction.MOVE_UP:
            self.state = navigation.move_up(self.state, height)
        elif action is KeyAction.MOVE_DOWN:
            self.state = navigation.move_down(self.state, height)
        elif action is KeyAction.ACTIVATE:
            self.activate()
        elif action is KeyAction.GO_BACK:
            self.state = navigation.go_back(self.state, self.list_directory)
        elif action is KeyAction.QUIT:
            self.running = False

    def run(self) -> NavigationState:
        """Run until quit or EOF on input; returns the final state."""
        self.running = True
        logger.info("session started in %s", self.start_path)
        with self.terminal.raw_mode():
            self.state = navigation.initial_state(self.start_path, self.list_directory)
            self.redraw()
            while self.running:
                key = self.read_next_key()
                if key == "":
                    self.running = False
                    break
                self.handle_key(key)
                self.redraw()
        logger.info("session ended in %s", self.state.current_path)
        return self.state


def run_browser(start_path: Path, config: Config) -> NavigationState:
    """Browse ``start_path`` interactively on the controlling terminal."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd):
        raise FeeError("stdin is not a terminal")
    terminal = TerminalController(stdin_fd, stdout_fd)
    browser = Browser(
        start_path,
        config,
        terminal,
        read_next_key=lambda: read_key(stdin_fd),
    )
    return browser.run()
