"""Resolve actions and targets and run them.

Every workflow invocation runs the same steps: load the blacklist,
discover scripts, resolve the target (tab or URL), resolve the action by
title, run it. Failures in the first two steps are logged and ignored so
the built-in actions keep working; everything after that raises.
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from alsf.actions.blacklist import Blacklist
from alsf.actions.models import Action, ActionKind
from alsf.actions.registry import ActionRegistry, create_default_registry
from alsf.actions.runner import run_action
from alsf.cache import WindowsCache
from alsf.config import Settings
from alsf.errors import TabNotFoundError, UnknownActionError
from alsf.safari import Safari, Tab, Window

logger = logging.getLogger(__name__)

# URL schemes other browsers / URL actions can handle
WEB_SCHEMES = ("http", "https")


def is_web_url(url: str) -> bool:
    """Check whether a URL can be passed to URL actions."""
    return urlparse(url).scheme in WEB_SCHEMES


def find_tab(windows: list[Window], window: int, tab: int) -> Tab:
    """Find a tab in a window/tab snapshot.

    Raises:
        TabNotFoundError: If no window or tab has the given number
    """
    for win in windows:
        if win.index != window:
            continue
        found = win.get_tab(tab)
        if found is not None:
            return found
    raise TabNotFoundError(window, tab)


class Dispatcher:
    """Runs named actions against tabs and URLs.

    The registry is populated lazily on first use: built-ins first,
    then scripts from the configured directories.

    Example:
        dispatcher = Dispatcher(settings)
        dispatcher.run_tab_action("Close Tabs to Right", window=1, tab=3)
        dispatcher.run_url_action("Open in Default Browser", "https://example.com")
    """

    def __init__(
        self,
        config: Settings,
        registry: ActionRegistry | None = None,
        safari: Safari | None = None,
        cache: WindowsCache | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            config: Workflow settings
            registry: Action registry (default: one holding the built-ins)
            safari: Safari controller
            cache: Window snapshot cache
        """
        self.config = config
        self.registry = registry or create_default_registry()
        self.safari = safari or Safari()
        self.cache = cache or WindowsCache(
            config.windows_cache_path(), max_age=config.windows_cache_seconds
        )
        self.blacklist = Blacklist(config.blacklist_path())
        self._prepared = False

    # -- setup ----------------------------------------------------------

    def prepare(self) -> ActionRegistry:
        """Load the blacklist and discover scripts (once).

        Returns:
            The populated registry
        """
        if self._prepared:
            return self.registry
        self._prepared = True

        try:
            self.registry.set_blacklist(self.blacklist.load())
        except OSError as e:
            logger.warning(f"Couldn't load blacklist {self.blacklist.path}: {e}")

        try:
            self.registry.load_scripts(self.config.script_dirs())
        except OSError as e:
            logger.warning(f"Script discovery failed: {e}")

        return self.registry

    # -- targets --------------------------------------------------------

    def windows(self) -> list[Window]:
        """Get Safari's windows, from the cache if it is fresh."""
        return self.cache.load_or_store(self.safari.windows)

    def resolve_tab(self, window: int, tab: int) -> Tab:
        """Find an open tab by window and tab number.

        Raises:
            TabNotFoundError: If the tab doesn't exist (any more)
        """
        return find_tab(self.windows(), window, tab)

    # -- actions --------------------------------------------------------

    def resolve_action(self, name: str, kind: ActionKind | str | None = None) -> Action:
        """Find an action by title, ignoring the blacklist.

        Args:
            name: Action title
            kind: Action class. If empty, tab actions are tried first,
                then URL actions.

        Raises:
            UnknownActionError: If no such action exists
        """
        self.prepare()
        if isinstance(kind, str) and not isinstance(kind, ActionKind):
            kind = _parse_kind(kind)
        return self.registry.find(name, kind)

    def list_actions(self, kind: ActionKind, url: str | None = None) -> list[Action]:
        """List actions for Alfred, minus blacklisted ones.

        Args:
            kind: TAB lists tab actions plus, if ``url`` is a web URL, URL
                actions. URL lists URL actions.
            url: URL of the tab the actions are for

        Returns:
            The actions
        """
        self.prepare()
        if kind == ActionKind.URL:
            return self.registry.list_url_actions()

        actions = self.registry.list_tab_actions()
        # No URL actions for favorites://, bookmarks:// etc.
        if url and is_web_url(url):
            actions += self.registry.list_url_actions()
        return actions

    def modifier_actions(self, modifiers: dict[str, str]) -> dict[str, Action]:
        """Resolve configured modifier actions.

        Args:
            modifiers: Alfred modifier key -> action title (empty = unset)

        Returns:
            Modifier key -> action, for the names that match an action
        """
        resolved = {}
        for key, name in modifiers.items():
            if not name:
                continue
            try:
                resolved[key] = self.resolve_action(name)
            except UnknownActionError:
                logger.warning(f"Unknown action for {key}: {name}")
        return resolved

    # -- execution ------------------------------------------------------

    def run_tab_action(
        self,
        name: str,
        window: int,
        tab: int,
        kind: ActionKind | str | None = ActionKind.TAB,
    ) -> Action:
        """Run an action on an open tab.

        URL actions are run on the tab's URL.

        Returns:
            The action that was run

        Raises:
            TabNotFoundError: If the tab doesn't exist
            UnknownActionError: If the action doesn't exist
            ScriptError, BridgeError: If the action fails
        """
        logger.debug(f"window={window}, tab={tab}, action={name!r}, type={kind}")
        self.prepare()
        target = self.resolve_tab(window, tab)
        action = self.resolve_action(name, kind)

        if action.kind == ActionKind.URL:
            run_action(action, target.url, safari=self.safari)
        else:
            run_action(action, target, safari=self.safari)
            if action.is_builtin:
                # Built-in tab actions all close tabs
                self.cache.invalidate()
        return action

    def run_url_action(self, name: str, url: str) -> Action:
        """Run a URL action.

        Raises:
            UnknownActionError: If the action doesn't exist
            ScriptError: If the action fails
        """
        logger.debug(f"url={url}, action={name!r}")
        action = self.resolve_action(name, ActionKind.URL)
        run_action(action, url, safari=self.safari)
        return action

    def activate(self, window: int, tab: int) -> None:
        """Bring a tab to the front."""
        logger.debug(f"Activating {window}x{tab}")
        self.safari.activate(window, tab)

    def close(self, window: int, tab: int, left: bool = False, right: bool = False) -> None:
        """Close a tab, or the tabs to its left and/or right.

        Both ``left`` and ``right`` closes every other tab in the window.
        """
        if left and right:
            logger.info(f"Closing all tabs in window {window} except {tab}")
            self.safari.close_tabs_other(window, tab)
        elif left:
            logger.info(f"Closing tabs in window {window} to left of {tab}")
            self.safari.close_tabs_left(window, tab)
        elif right:
            logger.info(f"Closing tabs in window {window} to right of {tab}")
            self.safari.close_tabs_right(window, tab)
        else:
            logger.info(f"Closing tab {tab} of window {window}")
            self.safari.close_tab(window, tab)
        self.cache.invalidate()


def _parse_kind(value: str) -> ActionKind | None:
    """Convert an action type hint into an ActionKind (None if unset/unknown)."""
    try:
        return ActionKind(value.lower())
    except ValueError:
        if value:
            logger.debug(f"Unknown action type {value!r}, trying all actions")
        return None
