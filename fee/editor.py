"""Editor launch helpers for opening the selected file.

Command templates are token lists; the literal ``$f`` token is replaced by
the target path. Building the argv is kept separate from spawning so the
substitution can be checked without starting processes.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import FILE_PLACEHOLDER, Config
from .errors import ProcessLaunchError

logger = logging.getLogger(__name__)


def build_editor_command(template: Sequence[str], target: Path) -> list[str]:
    """Substitute every ``$f`` token in ``template`` with ``target``.

    Other tokens pass through unchanged and the path is never appended when
    the template has no placeholder.
    """
    target_str = str(target)
    return [target_str if part == FILE_PLACEHOLDER else part for part in template]


def choose_editor_template(
    config: Config,
    target: Path,
    is_text: Callable[[Path], bool],
) -> Sequence[str]:
    """Pick the text or binary editor template for ``target``.

    The file is only probed when the two templates differ.
    """
    if config.text_editor_command == config.binary_editor_command:
        return config.text_editor_command
    if is_text(target):
        return config.text_editor_command
    return config.binary_editor_command


def spawn(command: Sequence[str]) -> subprocess.Popen:
    try:
        return subprocess.Popen(list(command))
    except OSError as exc:
        raise ProcessLaunchError(command, exc.strerror or str(exc)) from exc


def launch_editor(
    command: Sequence[str],
    wait: bool,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> subprocess.Popen | None:
    """Run ``command`` with the terminal temporarily back in normal mode.

    With ``wait`` the call blocks until the editor exits. Without it the
    browser takes the terminal back immediately while the editor keeps
    running, so both may draw at once. An empty command does nothing.
    """
    if not command:
        return None

    logger.info("launching editor %s (wait=%s)", list(command), wait)
    disable_tui_mode()
    try:
        process = spawn(command)
        if wait:
            status = process.wait()
            logger.debug("editor exited with status %s", status)
    finally:
        enable_tui_mode()
    return process
