"""Tests for editor command building and launching.

Substitution is checked as a pure function; launching is checked with
``subprocess.Popen`` patched out so no process is started.
"""

from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from fee.config import Config
from fee.editor import build_editor_command, choose_editor_template, launch_editor
from fee.errors import ProcessLaunchError


def _config(text=("nano", "$f"), binary=("hexedit", "$f"), wait=True) -> Config:
    return Config(text_editor_command=tuple(text), binary_editor_command=tuple(binary), wait_for_editor_exit=wait)


class BuildEditorCommandTests(unittest.TestCase):
    def test_placeholder_is_replaced_with_target_path(self) -> None:
        self.assertEqual(build_editor_command(["nano", "$f"], Path("/tmp/a.txt")), ["nano", "/tmp/a.txt"])

    def test_template_without_placeholder_is_unchanged(self) -> None:
        self.assertEqual(build_editor_command(["code", "--wait"], Path("/tmp/a.txt")), ["code", "--wait"])

    def test_every_placeholder_is_replaced_and_other_tokens_kept(self) -> None:
        command = build_editor_command(["diff", "$f", "--", "$f.bak", "$f"], Path("/x/y"))
        self.assertEqual(command, ["diff", "/x/y", "--", "$f.bak", "/x/y"])

    def test_empty_template_builds_empty_command(self) -> None:
        self.assertEqual(build_editor_command([], Path("/tmp/a.txt")), [])


class ChooseEditorTemplateTests(unittest.TestCase):
    def test_text_file_uses_text_editor(self) -> None:
        probe = mock.Mock(return_value=True)
        template = choose_editor_template(_config(), Path("/tmp/a.txt"), probe)
        self.assertEqual(template, ("nano", "$f"))
        probe.assert_called_once_with(Path("/tmp/a.txt"))

    def test_binary_file_uses_binary_editor(self) -> None:
        template = choose_editor_template(_config(), Path("/tmp/a.bin"), lambda _path: False)
        self.assertEqual(template, ("hexedit", "$f"))

    def test_identical_templates_skip_the_probe(self) -> None:
        probe = mock.Mock(side_effect=AssertionError("probe should not run"))
        config = _config(text=("vim", "$f"), binary=("vim", "$f"))
        self.assertEqual(choose_editor_template(config, Path("/tmp/a"), probe), ("vim", "$f"))
        probe.assert_not_called()


class LaunchEditorTests(unittest.TestCase):
    def test_waits_for_editor_between_terminal_mode_switches(self) -> None:
        events: list[str] = []
        process = mock.Mock()
        process.wait.side_effect = lambda: events.append("wait") or 0

        def fake_popen(command):
            events.append(f"spawn:{' '.join(command)}")
            return process

        with mock.patch("fee.editor.subprocess.Popen", side_effect=fake_popen):
            result = launch_editor(
                ["nano", "/tmp/a.txt"],
                True,
                lambda: events.append("disable"),
                lambda: events.append("enable"),
            )

        self.assertIs(result, process)
        self.assertEqual(events, ["disable", "spawn:nano /tmp/a.txt", "wait", "enable"])

    def test_no_wait_returns_immediately(self) -> None:
        process = mock.Mock()
        enable = mock.Mock()
        with mock.patch("fee.editor.subprocess.Popen", return_value=process) as popen:
            launch_editor(["gedit", "/tmp/a.txt"], False, mock.Mock(), enable)

        popen.assert_called_once_with(["gedit", "/tmp/a.txt"])
        process.wait.assert_not_called()
        enable.assert_called_once()

    def test_empty_command_does_nothing(self) -> None:
        disable = mock.Mock()
        with mock.patch("fee.editor.subprocess.Popen") as popen:
            self.assertIsNone(launch_editor([], True, disable, mock.Mock()))
        popen.assert_not_called()
        disable.assert_not_called()

    def test_missing_executable_raises_and_restores_tui_mode(self) -> None:
        enable = mock.Mock()
        with mock.patch("fee.editor.subprocess.Popen", side_effect=FileNotFoundError(2, "No such file or directory")):
            with self.assertRaises(ProcessLaunchError) as ctx:
                launch_editor(["no-such-editor", "/tmp/a"], True, mock.Mock(), enable)

        enable.assert_called_once()
        self.assertEqual(ctx.exception.command, ["no-such-editor", "/tmp/a"])
        self.assertIn("no-such-editor", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
