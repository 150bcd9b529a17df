"""Tests for running actions."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from alsf.actions.models import Action, ActionKind, BuiltinKind
from alsf.actions.registry import create_default_registry
from alsf.actions.runner import OSASCRIPT, invocation_plan, run_action, target_args
from alsf.errors import InvalidTargetError, ScriptError
from alsf.safari import Tab

TAB = Tab(index=3, window_index=2, title="Python", url="https://www.python.org/")


def completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestInvocationPlan:
    """Tests for choosing how a script is started."""

    def test_executable_runs_directly(self, tmp_path, write_script):
        path = write_script(tmp_path / "CloseAll", "#!/bin/sh\n", executable=True)

        plan = invocation_plan(path)

        assert plan.direct
        assert plan.argv(["2", "3"]) == [str(path), "2", "3"]

    def test_executable_with_script_extension_runs_directly(self, tmp_path, write_script):
        path = write_script(tmp_path / "run.sh", "#!/bin/sh\n", executable=True)

        assert invocation_plan(path).program == str(path)

    def test_applescript(self, tmp_path, write_script):
        path = write_script(tmp_path / "OpenInChrome.scpt")

        plan = invocation_plan(path)

        assert not plan.direct
        assert plan.argv(["https://x.org"]) == [OSASCRIPT, str(path), "https://x.org"]

    def test_javascript(self, tmp_path, write_script):
        path = write_script(tmp_path / "Copy URL.js")

        plan = invocation_plan(path)

        assert plan.program == OSASCRIPT
        assert plan.flags == ["-l", "JavaScript"]
        assert plan.argv(["1", "2"]) == [OSASCRIPT, "-l", "JavaScript", str(path), "1", "2"]

    @pytest.mark.parametrize("ext,shell", [(".sh", "/bin/sh"), (".bash", "/bin/bash"), (".zsh", "/bin/zsh")])
    def test_shell_scripts(self, tmp_path, write_script, ext, shell):
        path = write_script(tmp_path / f"script{ext}")

        plan = invocation_plan(path)

        assert plan.program == shell
        assert plan.script == path

    def test_unknown_file(self, tmp_path, write_script):
        path = write_script(tmp_path / "notes.txt")

        with pytest.raises(ScriptError, match="Don't know how to run"):
            invocation_plan(path)


class TestTargetArgs:
    def test_tab(self):
        assert target_args(TAB) == ["2", "3"]

    def test_url(self):
        assert target_args("https://example.com") == ["https://example.com"]


class TestRunScript:
    """Tests for script actions."""

    @patch("alsf.actions.process.subprocess.run")
    def test_tab_script_gets_window_and_tab(self, mock_run, tmp_path, write_script):
        path = write_script(tmp_path / "tab" / "Copy URL.js")
        mock_run.return_value = completed()
        action = Action.from_script(path, ActionKind.TAB)

        run_action(action, TAB)

        argv = mock_run.call_args[0][0]
        assert argv == [OSASCRIPT, "-l", "JavaScript", str(path), "2", "3"]

    @patch("alsf.actions.process.subprocess.run")
    def test_url_script_gets_url(self, mock_run, tmp_path, write_script):
        path = write_script(tmp_path / "url" / "OpenInChrome", "#!/bin/sh\n", executable=True)
        mock_run.return_value = completed()
        action = Action.from_script(path, ActionKind.URL)

        run_action(action, "https://www.python.org/")

        assert mock_run.call_args[0][0] == [str(path), "https://www.python.org/"]

    @patch("alsf.actions.process.subprocess.run")
    def test_nonzero_exit(self, mock_run, tmp_path, write_script):
        path = write_script(tmp_path / "tab" / "Broken.sh")
        mock_run.return_value = completed(returncode=1, stderr="boom")
        action = Action.from_script(path, ActionKind.TAB)

        with pytest.raises(ScriptError, match="boom"):
            run_action(action, TAB)

    @patch("alsf.actions.process.subprocess.run")
    def test_spawn_failure(self, mock_run, tmp_path, write_script):
        path = write_script(tmp_path / "tab" / "Gone.sh")
        mock_run.side_effect = FileNotFoundError("no such file")
        action = Action.from_script(path, ActionKind.TAB)

        with pytest.raises(ScriptError, match="Couldn't run"):
            run_action(action, TAB)


class TestRunBuiltin:
    """Tests for built-in actions."""

    @pytest.mark.parametrize("title,method", [
        ("Close Tab", "close_tab"),
        ("Close Other Tabs", "close_tabs_other"),
        ("Close Tabs to Left", "close_tabs_left"),
        ("Close Tabs to Right", "close_tabs_right"),
    ])
    def test_close_tabs(self, title, method):
        safari = MagicMock()
        action = create_default_registry().find_tab_action(title)

        run_action(action, TAB, safari=safari)

        getattr(safari, method).assert_called_once_with(2, 3)

    def test_close_window(self):
        safari = MagicMock()
        action = create_default_registry().find_tab_action("Close Window")

        run_action(action, TAB, safari=safari)

        safari.close_window.assert_called_once_with(2)

    @patch("alsf.actions.process.subprocess.run")
    def test_open_in_default_browser(self, mock_run):
        mock_run.return_value = completed()
        action = create_default_registry().find_url_action("Open in Default Browser")

        run_action(action, "https://example.com", safari=MagicMock())

        assert mock_run.call_args[0][0] == ["/usr/bin/open", "https://example.com"]


class TestTargetCheck:
    """Tests for target/class mismatches."""

    def test_tab_action_needs_tab(self):
        safari = MagicMock()
        action = Action(title="Close Tab", kind=ActionKind.TAB, builtin=BuiltinKind.CLOSE_TAB)

        with pytest.raises(InvalidTargetError):
            run_action(action, "https://example.com", safari=safari)
        safari.close_tab.assert_not_called()

    @patch("alsf.actions.process.subprocess.run")
    def test_url_action_needs_url(self, mock_run):
        action = Action(title="x", kind=ActionKind.URL, script_path=Path("/tmp/x.sh"))

        with pytest.raises(InvalidTargetError):
            run_action(action, TAB)
        mock_run.assert_not_called()
