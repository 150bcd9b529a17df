"""Execution of actions against tabs and URLs."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from alsf.actions.builtins import TAB_HANDLERS, URL_HANDLERS
from alsf.actions.loader import (
    SHELL_EXTENSIONS,
    is_executable,
    is_osa_script,
    is_shell_script,
)
from alsf.actions.models import Action, ActionKind
from alsf.actions.process import run_command
from alsf.errors import InvalidTargetError, ScriptError
from alsf.safari import Safari, Tab

logger = logging.getLogger(__name__)

OSASCRIPT = "/usr/bin/osascript"


class InvocationPlan(BaseModel):
    """How to start a script.

    A directly executable script has only ``program``. An interpreted
    script has the interpreter as ``program``, interpreter flags, and
    the script path.
    """

    program: str = Field(description="Executable to start")
    flags: list[str] = Field(default_factory=list, description="Interpreter options")
    script: Path | None = Field(default=None, description="Script passed to the interpreter")

    @property
    def direct(self) -> bool:
        return self.script is None

    def argv(self, args: list[str]) -> list[str]:
        """Build the full command line for the given action arguments."""
        cmd = [self.program] + self.flags
        if self.script is not None:
            cmd.append(str(self.script))
        return cmd + list(args)


def invocation_plan(path: Path) -> InvocationPlan:
    """Decide how to run a script.

    Executable files are run directly. Otherwise AppleScript/JXA files
    are run with osascript (``-l JavaScript`` for ``.js``) and shell
    scripts with the shell matching their extension.

    Raises:
        ScriptError: If the file is neither executable nor a known
            script type
    """
    path = Path(path)
    if is_executable(path):
        return InvocationPlan(program=str(path))

    if is_osa_script(path):
        flags = ["-l", "JavaScript"] if path.suffix.lower() == ".js" else []
        return InvocationPlan(program=OSASCRIPT, flags=flags, script=path)

    if is_shell_script(path):
        return InvocationPlan(program=SHELL_EXTENSIONS[path.suffix.lower()], script=path)

    raise ScriptError(f"Don't know how to run script: {path}")


def target_args(target: Tab | str) -> list[str]:
    """Get the positional arguments a script receives for a target.

    Tab scripts get the window and tab number, URL scripts the URL.
    """
    if isinstance(target, Tab):
        return [str(target.window_index), str(target.index)]
    return [str(target)]


def _check_target(action: Action, target: Tab | str) -> None:
    if action.kind == ActionKind.TAB and not isinstance(target, Tab):
        raise InvalidTargetError(f"Tab action {action.title!r} needs a tab, got {target!r}")
    if action.kind == ActionKind.URL and not isinstance(target, str):
        raise InvalidTargetError(f"URL action {action.title!r} needs a URL, got {target!r}")


def run_script(action: Action, target: Tab | str) -> str:
    """Run a script action.

    Returns:
        The script's output

    Raises:
        ScriptError: If the script can't be run or fails
    """
    plan = invocation_plan(action.script_path)
    logger.info(f"Running {action.kind.value} script {action.title!r}")
    return run_command(plan.argv(target_args(target)))


def run_action(action: Action, target: Tab | str, safari: Safari | None = None) -> None:
    """Run an action against a target.

    Args:
        action: The action to run
        target: A Tab for tab actions, a URL string for URL actions
        safari: Safari controller used by built-ins (default: new one)

    Raises:
        InvalidTargetError: If the target doesn't suit the action
        ScriptError: If a script action can't be run or fails
        BridgeError: If a built-in's call to Safari fails
    """
    _check_target(action, target)

    if action.builtin is None:
        run_script(action, target)
        return

    safari = safari or Safari()
    logger.info(f"Running built-in action {action.title!r}")
    if action.kind == ActionKind.TAB:
        TAB_HANDLERS[action.builtin](safari, target)
    else:
        URL_HANDLERS[action.builtin](safari, target)
