"""Registry of tab and URL actions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from alsf.actions.builtins import builtin_actions
from alsf.actions.loader import discover_scripts
from alsf.actions.models import Action, ActionKind
from alsf.errors import RegistrationError, UnknownActionError

logger = logging.getLogger(__name__)


class ActionRegistry:
    """Catalogue of actions, keyed by title within each action class.

    Tab actions and URL actions are separate namespaces: the same title
    may exist in both. Registering an action under a title that is
    already taken in its class replaces the earlier action, so scripts
    (loaded after the built-ins) can shadow built-ins, and user scripts
    (loaded after bundled ones) can shadow bundled scripts.

    The blacklist only affects the ``list_*`` methods. ``find_*``
    always searches every registered action, so a blacklisted action can
    still be run by name.
    """

    def __init__(self, blacklist: Iterable[str] | None = None) -> None:
        """Initialize an empty registry.

        Args:
            blacklist: Titles to hide from action lists
        """
        self._actions: dict[ActionKind, dict[str, Action]] = {
            ActionKind.TAB: {},
            ActionKind.URL: {},
        }
        self.blacklist: set[str] = set(blacklist or ())

    def set_blacklist(self, names: Iterable[str]) -> None:
        """Replace the set of blacklisted titles."""
        self.blacklist = set(names)

    def register(self, action: Action) -> None:
        """Add an action, replacing any action with the same title and class.

        Raises:
            RegistrationError: If the action has no valid class
        """
        actions = self._actions.get(action.kind)
        if actions is None:
            raise RegistrationError(f"Unknown action type: {action!r}")

        if action.title in actions:
            logger.debug(f"{action.kind.value} action {action.title!r} replaced")
        actions[action.title] = action

    def register_builtins(self) -> None:
        """Register the built-in actions."""
        for action in builtin_actions():
            self.register(action)

    def load_scripts(self, directories: Iterable[Path]) -> None:
        """Discover scripts and register them.

        Every directory is searched even if an earlier one fails.
        Blacklisted scripts are registered too (they are only hidden
        from lists).

        Args:
            directories: Discovery roots, in registration order

        Raises:
            OSError: The first error encountered, after all directories
                have been searched
        """
        errors: list[Exception] = []

        for directory in directories:
            try:
                scripts = discover_scripts(directory)
            except OSError as e:
                logger.warning(f"Couldn't load scripts from {directory}: {e}")
                errors.append(e)
                continue

            for action in scripts:
                self.register(action)
                if action.title in self.blacklist:
                    logger.debug(f"blacklisted: {action.title}")
                else:
                    logger.debug(f"{action.kind.value} script {action.title!r} from {action.script_path}")

        if errors:
            raise errors[0]

    def list_actions(self, kind: ActionKind) -> list[Action]:
        """List registered actions of one class, minus blacklisted ones."""
        return [a for a in self._actions[kind].values() if a.title not in self.blacklist]

    def list_tab_actions(self) -> list[Action]:
        return self.list_actions(ActionKind.TAB)

    def list_url_actions(self) -> list[Action]:
        return self.list_actions(ActionKind.URL)

    def find_tab_action(self, title: str) -> Action | None:
        """Get a tab action by exact title, ignoring the blacklist."""
        return self._actions[ActionKind.TAB].get(title)

    def find_url_action(self, title: str) -> Action | None:
        """Get a URL action by exact title, ignoring the blacklist."""
        return self._actions[ActionKind.URL].get(title)

    def find(self, title: str, kind: ActionKind | None = None) -> Action:
        """Get an action by title.

        Args:
            title: Action title
            kind: Action class to search. If None, tab actions are
                searched first, then URL actions.

        Returns:
            The matching action

        Raises:
            UnknownActionError: If no matching action is registered
        """
        kinds = [kind] if kind is not None else [ActionKind.TAB, ActionKind.URL]
        for k in kinds:
            action = self._actions[k].get(title)
            if action is not None:
                return action
        raise UnknownActionError(title)

    def __len__(self) -> int:
        return sum(len(actions) for actions in self._actions.values())

    def __iter__(self) -> Iterator[Action]:
        for actions in self._actions.values():
            yield from actions.values()


def create_default_registry(blacklist: Iterable[str] | None = None) -> ActionRegistry:
    """Create a registry with the built-in actions registered.

    Args:
        blacklist: Titles to hide from action lists

    Returns:
        ActionRegistry holding the built-ins.
    """
    registry = ActionRegistry(blacklist=blacklist)
    registry.register_builtins()
    return registry
