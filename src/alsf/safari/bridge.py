"""Safari controller built on JXA programs run by /usr/bin/osascript."""

import json
import logging
import os
import subprocess
from typing import Any

from pydantic import ValidationError

from alsf.errors import AlsfError
from alsf.safari.types import Tab, Window

logger = logging.getLogger(__name__)

OSASCRIPT = "/usr/bin/osascript"

# Path to the bridge programs
_PACKAGE_DIR = os.path.dirname(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)
SCRIPTS_BASE = os.path.join(_PACKAGE_DIR, "macos-automation", "safari")


class BridgeError(AlsfError):
    """Exception raised when a Safari bridge program fails."""

    pass


def run_jxa(script_name: str, args: list[str] | None = None) -> str:
    """Run a JXA bridge program.

    Args:
        script_name: Name of the program (e.g., "tabs.js")
        args: Positional arguments passed to the program's run(argv)

    Returns:
        The program's stdout, stripped

    Raises:
        BridgeError: If the program is missing, can't be started or fails
    """
    script_path = os.path.join(SCRIPTS_BASE, script_name)

    if not os.path.exists(script_path):
        raise BridgeError(f"Script not found: {script_path}")

    cmd = [OSASCRIPT, "-l", "JavaScript", script_path] + (args or [])
    logger.debug(f"Running bridge script: {cmd}")

    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        raise BridgeError(f"Script execution failed: {e}") from e

    stdout = proc.stdout.strip()
    stderr = proc.stderr.strip()

    # console.log() in JXA writes to stderr
    if stderr:
        logger.debug(f"Script stderr: {stderr}")

    if proc.returncode != 0:
        raise BridgeError(stderr or f"{script_name} exited with code {proc.returncode}")

    return stdout


def run_jxa_json(script_name: str, args: list[str] | None = None) -> Any:
    """Run a JXA bridge program and decode its JSON output.

    Raises:
        BridgeError: If the program fails or prints invalid JSON
    """
    stdout = run_jxa(script_name, args)

    if not stdout:
        raise BridgeError("Script returned no output")

    try:
        return json.loads(stdout)
    except json.JSONDecodeError as e:
        raise BridgeError(f"Invalid JSON response: {e}\nOutput: {stdout[:200]}") from e


class Safari:
    """Safari controller.

    Window and tab numbers are 1-based, as in Safari's scripting
    dictionary. Window 1 is the frontmost window.

    Example:
        safari = Safari()
        for win in safari.windows():
            print(win.index, [t.title for t in win.tabs])
        safari.close_tabs_right(1, 3)
    """

    def windows(self) -> list[Window]:
        """Get Safari's open browser windows with their tabs.

        This talks to Safari via the Scripting Bridge and takes about
        half a second, so callers should cache the result.
        """
        data = run_jxa_json("tabs.js")
        try:
            return [Window.model_validate(w) for w in data]
        except ValidationError as e:
            raise BridgeError(f"Invalid window data: {e}") from e

    def active_tab(self) -> Tab:
        """Get the current tab of the frontmost window."""
        data = run_jxa_json("current-tab.js")
        try:
            return Tab.model_validate(data)
        except ValidationError as e:
            raise BridgeError(f"Invalid tab data: {e}") from e

    def activate(self, window: int, tab: int = 0) -> None:
        """Bring a window to the front and make a tab current.

        Args:
            window: Window number
            tab: Tab number; 0 leaves the current tab unchanged
        """
        args = [str(window)]
        if tab > 0:
            args.append(str(tab))
        run_jxa("activate.js", args)

    def _close(self, what: str, window: int, tab: int = 0) -> None:
        # Window 0 means the frontmost window, tab 0 the current tab
        args = [what, str(window or 1)]
        if tab > 0:
            args.append(str(tab))
        run_jxa("close.js", args)

    def close_tab(self, window: int, tab: int) -> None:
        """Close a tab."""
        self._close("tab", window, tab)

    def close_tabs_other(self, window: int, tab: int) -> None:
        """Close every tab in the window except the given one."""
        self._close("tabs-other", window, tab)

    def close_tabs_left(self, window: int, tab: int) -> None:
        """Close the tabs to the left of the given one."""
        self._close("tabs-left", window, tab)

    def close_tabs_right(self, window: int, tab: int) -> None:
        """Close the tabs to the right of the given one."""
        self._close("tabs-right", window, tab)

    def close_window(self, window: int) -> None:
        """Close a window."""
        self._close("win", window)

    def run_js(self, window: int, tab: int, js: str) -> None:
        """Execute JavaScript in a tab."""
        run_jxa("run-js.js", [str(window), str(tab), js])
