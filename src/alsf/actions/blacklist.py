"""User blacklist of action names.

The blacklist lives in ``blacklist.txt`` in the workflow's data
directory. It is bootstrapped from a commented template on first use and
only ever appended to afterwards.

Blacklisting hides an action from action lists; it does not stop the
action being run by name (e.g. via a modifier key).
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

BLACKLIST_TEMPLATE = """\
#
# Action blacklist
# ----------------
#
# Names of actions that should not be shown in action lists,
# one per line and without file extension. For example:
#
# Open in Firefox
#
# hides the "Open in Firefox" action.
#
# Blacklisted actions can still be run directly, so you can hide
# an action here and still bind it to a modifier key in the
# workflow's configuration sheet.
#
# Empty lines and lines starting with # are ignored.
#

"""


def parse_blacklist(content: str) -> set[str]:
    """Parse blacklist file content.

    Args:
        content: The file's text

    Returns:
        Set of blacklisted action titles
    """
    names = set()
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        names.add(line)
    return names


class Blacklist:
    """The action blacklist file and its in-memory copy.

    Example:
        blacklist = Blacklist(settings.blacklist_path())
        blacklist.load()
        if "Open in Firefox" in blacklist:
            ...
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.names: set[str] = set()

    def ensure_file(self) -> Path:
        """Create the blacklist file from the template if it doesn't exist.

        Returns:
            Path to the blacklist file
        """
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(BLACKLIST_TEMPLATE, encoding="utf-8")
            self.path.chmod(0o600)
            logger.debug(f"Created blacklist: {self.path}")
        return self.path

    def load(self) -> set[str]:
        """Read the blacklist file, replacing the in-memory names.

        Returns:
            Set of blacklisted action titles
        """
        path = self.ensure_file()
        self.names = parse_blacklist(path.read_text(encoding="utf-8"))
        logger.debug(f"Loaded {len(self.names)} blacklisted action(s) from {path}")
        return self.names

    def add(self, names: list[str]) -> None:
        """Append names to the blacklist file.

        Existing entries are not checked, so a name may end up in the
        file more than once. The in-memory set is not changed until the
        next ``load()``.

        Args:
            names: Action titles to blacklist
        """
        path = self.ensure_file()
        with open(path, "a", encoding="utf-8") as f:
            for name in names:
                f.write(name + "\n")
                logger.info(f"Blacklisted action: {name}")

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)
