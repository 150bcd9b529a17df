"""Actions implemented in code."""

from typing import Callable

from alsf.actions.models import Action, ActionKind, BuiltinKind
from alsf.actions.process import run_command
from alsf.icons import ICON_TAB, ICON_URL
from alsf.safari import Safari, Tab

OPEN = "/usr/bin/open"

# (behaviour, class, title, icon) for each built-in, in registration order
_BUILTINS: list[tuple[BuiltinKind, ActionKind, str, str]] = [
    (BuiltinKind.CLOSE_TAB, ActionKind.TAB, "Close Tab", ICON_TAB),
    (BuiltinKind.CLOSE_TABS_LEFT, ActionKind.TAB, "Close Tabs to Left", ICON_TAB),
    (BuiltinKind.CLOSE_TABS_RIGHT, ActionKind.TAB, "Close Tabs to Right", ICON_TAB),
    (BuiltinKind.CLOSE_TABS_OTHER, ActionKind.TAB, "Close Other Tabs", ICON_TAB),
    (BuiltinKind.CLOSE_WINDOW, ActionKind.TAB, "Close Window", ICON_TAB),
    (BuiltinKind.OPEN_URL, ActionKind.URL, "Open in Default Browser", ICON_URL),
]


def builtin_actions() -> list[Action]:
    """Create the built-in actions.

    Returns:
        Fresh Action objects for every built-in.
    """
    return [
        Action(title=title, kind=kind, icon=icon, builtin=builtin)
        for builtin, kind, title, icon in _BUILTINS
    ]


def open_url(safari: Safari, url: str) -> None:
    """Open a URL in the user's default browser."""
    run_command([OPEN, url])


TabHandler = Callable[[Safari, Tab], None]
URLHandler = Callable[[Safari, str], None]

TAB_HANDLERS: dict[BuiltinKind, TabHandler] = {
    BuiltinKind.CLOSE_TAB: lambda s, t: s.close_tab(t.window_index, t.index),
    BuiltinKind.CLOSE_TABS_OTHER: lambda s, t: s.close_tabs_other(t.window_index, t.index),
    BuiltinKind.CLOSE_TABS_LEFT: lambda s, t: s.close_tabs_left(t.window_index, t.index),
    BuiltinKind.CLOSE_TABS_RIGHT: lambda s, t: s.close_tabs_right(t.window_index, t.index),
    BuiltinKind.CLOSE_WINDOW: lambda s, t: s.close_window(t.window_index),
}

URL_HANDLERS: dict[BuiltinKind, URLHandler] = {
    BuiltinKind.OPEN_URL: open_url,
}
