"""Discovery of action scripts on disk.

Scripts live in directories named ``tab`` or ``url``; the name decides
whether the script receives a tab (window and tab number) or a URL. A
file is a script if it is executable or has a scripting extension.
"""

import logging
import os
from pathlib import Path

from alsf.actions.models import Action, ActionKind, default_icon

logger = logging.getLogger(__name__)

# Extensions of files that are run via /usr/bin/osascript
OSA_EXTENSIONS = {".scpt", ".js", ".applescript", ".scptd"}

# Extensions of shell scripts and the shell that runs them
SHELL_EXTENSIONS = {
    ".sh": "/bin/sh",
    ".bash": "/bin/bash",
    ".zsh": "/bin/zsh",
}

SCRIPT_EXTENSIONS = OSA_EXTENSIONS | set(SHELL_EXTENSIONS)

# Image files beside a script with the same basename become its icon
ICON_EXTENSIONS = [".png", ".icns", ".jpg", ".jpeg", ".gif"]


def is_executable(path: Path) -> bool:
    """Check whether any executable bit is set on a regular file."""
    try:
        st = path.stat()
    except OSError as e:
        logger.debug(f"Couldn't stat {path}: {e}")
        return False
    return path.is_file() and bool(st.st_mode & 0o111)


def is_osa_script(path: Path) -> bool:
    return path.suffix.lower() in OSA_EXTENSIONS


def is_shell_script(path: Path) -> bool:
    return path.suffix.lower() in SHELL_EXTENSIONS


def is_script(path: Path) -> bool:
    """Check whether a file can be an action script.

    Executable files always qualify. Other files qualify if their
    extension is a recognised scripting extension.
    """
    return is_executable(path) or path.suffix.lower() in SCRIPT_EXTENSIONS


def script_kind(path: Path, root: Path) -> ActionKind | None:
    """Determine a script's action class from where it was found.

    The script's parent directory is checked first, then the discovery
    root, so both ``root/tab/x.js`` (root = ``scripts``) and
    ``tab/sub/x.js`` (root = ``tab``) are tab scripts.

    Returns:
        The action class or None if neither directory is named
        ``tab`` or ``url``.
    """
    for name in (path.parent.name, root.name):
        try:
            return ActionKind(name)
        except ValueError:
            continue
    return None


def find_icon(path: Path, kind: ActionKind | None = None) -> str:
    """Find the icon for a script.

    Looks for an image beside the script with the same basename (only
    the extension differs), e.g. ``Open in Chrome.png`` for
    ``Open in Chrome.scpt``.

    Args:
        path: Path to the script
        kind: Action class, used to pick the fallback icon

    Returns:
        Path of the sibling image or the class's default icon
    """
    for ext in ICON_EXTENSIONS:
        icon = path.with_suffix(ext)
        if icon != path and icon.exists():
            return str(icon)
    return default_icon(kind)


def discover_scripts(directory: Path) -> list[Action]:
    """Discover all action scripts in a directory tree.

    Files in directories that aren't a ``tab`` or ``url`` directory are
    skipped with a log message. ``.scptd`` bundles are treated as a
    single script and not descended into.

    Args:
        directory: Root directory to search

    Returns:
        List of script actions, sorted by path within each directory

    Raises:
        FileNotFoundError: If the directory doesn't exist
        OSError: If part of the tree can't be read
    """
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Script directory not found: {root}")

    def _raise(err: OSError) -> None:
        raise err

    actions = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        bundles = [d for d in dirnames if d.lower().endswith(".scptd")]
        dirnames[:] = sorted(d for d in dirnames if d not in bundles)

        candidates = [Path(dirpath) / name for name in sorted(filenames + bundles)]
        for path in candidates:
            if not (path.suffix.lower() == ".scptd" or is_script(path)):
                continue

            kind = script_kind(path, root)
            if kind is None:
                logger.debug(f"Ignoring script outside a tab/url directory: {path}")
                continue

            action = Action.from_script(path, kind, icon=find_icon(path, kind))
            logger.debug(f"Found {kind.value} script {action.title!r} at {path}")
            actions.append(action)

    return actions
