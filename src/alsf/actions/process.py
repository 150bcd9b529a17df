"""Run external programs for actions."""

import logging
import shlex
import subprocess

from alsf.errors import ScriptError

logger = logging.getLogger(__name__)


def run_command(argv: list[str]) -> str:
    """Run a program and wait for it to exit.

    No timeout is applied: a hung program blocks until Alfred kills the
    workflow.

    Args:
        argv: Program and its arguments

    Returns:
        The program's stdout, stripped

    Raises:
        ScriptError: If the program can't be started or exits non-zero
    """
    cmd = " ".join(shlex.quote(p) for p in argv)
    logger.debug(f"Running: {cmd}")

    try:
        proc = subprocess.run(argv, capture_output=True, text=True)
    except OSError as e:
        raise ScriptError(f"Couldn't run {argv[0]}: {e}") from e

    stdout = proc.stdout.strip()
    stderr = proc.stderr.strip()

    logger.debug(f"Return code: {proc.returncode}")
    if stdout:
        logger.debug(f"stdout: {stdout[:500]}")
    if stderr:
        logger.debug(f"stderr: {stderr[:500]}")

    if proc.returncode != 0:
        raise ScriptError(stderr or f"{argv[0]} exited with code {proc.returncode}")

    return stdout
