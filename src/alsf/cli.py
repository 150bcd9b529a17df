"""Command-line interface called by the Alfred workflow.

Script Filter commands (``tabs``, ``actions``, ``config``) print
Alfred's JSON feedback. Run Script commands (``action``, ``activate``,
``close``, ``blacklist``) print nothing on success and the error message
on failure, which Alfred shows in a notification.

Logging goes to stderr, which Alfred shows in its workflow debugger.
"""

import argparse
import logging
import sys
from typing import Callable
from urllib.parse import urlparse

from rich.console import Console
from rich.logging import RichHandler

from alsf import __version__
from alsf.actions.blacklist import Blacklist
from alsf.actions.models import Action, ActionKind
from alsf.config import Settings, settings
from alsf.dispatch import Dispatcher, is_web_url
from alsf.errors import AlsfError
from alsf.feedback import Feedback, Item, error_feedback, workflow_variables
from alsf.icons import ICON_ACTIVE, ICON_BLACKLIST, ICON_FOLDER, ICON_TAB

# stdout belongs to Alfred
console = Console(stderr=True)

logger = logging.getLogger("alsf")

# Stripped from hostnames to build search keywords
URL_KILL_WORDS = ["www.", ".com", ".net", ".org", ".co.uk"]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    fmt = "%(name)s: %(message)s" if verbose else "%(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[RichHandler(rich_tracebacks=True, console=console, show_path=verbose)],
    )


def url_keywords(url: str) -> str:
    """Get a URL's hostname without common prefixes/suffixes."""
    host = urlparse(url).hostname or ""
    for word in URL_KILL_WORDS:
        host = host.replace(word, "")
    return host


def _dispatcher(config: Settings) -> Dispatcher:
    return Dispatcher(config)


def _max_results(args: argparse.Namespace, config: Settings) -> int:
    if args.max_results is None:
        return config.max_results
    return args.max_results


# =============================================================================
# SCRIPT FILTERS
# =============================================================================


def _action_item(fb: Feedback, action: Action) -> Item:
    return (
        fb.add_item(
            action.title,
            arg=action.title,
            icon=action.icon,
            copytext=action.title,
            valid=True,
        )
        .var("action", f"{action.kind.value}-action")
        .var("ALSF_ACTION", action.title)
        .var("ALSF_ACTION_TYPE", action.kind.value)
    )


def cmd_actions(args: argparse.Namespace, config: Settings) -> None:
    """List tab or URL actions."""
    dispatcher = _dispatcher(config)
    kind = ActionKind(args.kind)
    logger.debug(f"url={args.url}, query={args.query!r}")

    fb = Feedback(max_results=_max_results(args, config))
    for action in dispatcher.list_actions(kind, url=args.url):
        item = _action_item(fb, action)
        if kind == ActionKind.TAB:
            item.var("ALSF_WINDOW", str(args.window)).var("ALSF_TAB", str(args.tab))
        else:
            item.var("ALSF_URL", args.url)

    if args.query:
        fb.filter(args.query)
    fb.warn_empty("No actions found", "Try a different query?")
    fb.send()


def cmd_tabs(args: argparse.Namespace, config: Settings) -> None:
    """List open tabs with modifier actions."""
    dispatcher = _dispatcher(config)

    modifiers = config.tab_modifiers()
    for key, flag in (("ctrl", args.tab_ctrl), ("alt", args.tab_opt),
                      ("fn", args.tab_fn), ("shift", args.tab_shift)):
        if flag is not None:
            modifiers[key] = flag
    mod_actions = dispatcher.modifier_actions(modifiers)

    fb = Feedback(max_results=_max_results(args, config))
    for win in dispatcher.windows():
        for tab in win.tabs:
            item = fb.add_item(
                tab.title,
                subtitle=tab.url,
                valid=True,
                icon=ICON_ACTIVE if tab.active else ICON_TAB,
                match=f"{tab.title} {url_keywords(tab.url)}",
            )
            item.var("ALSF_WINDOW", str(tab.window_index)) \
                .var("ALSF_TAB", str(tab.index)) \
                .var("ALSF_URL", tab.url) \
                .var("action", "activate")

            item.modifier("cmd", subtitle="Other actions…").var("action", "tab-actions")

            for key, action in mod_actions.items():
                if action.kind == ActionKind.URL and not is_web_url(tab.url):
                    continue
                item.modifier(key, subtitle=action.title) \
                    .var("action", "tab-action") \
                    .var("ALSF_ACTION", action.title) \
                    .var("ALSF_ACTION_TYPE", action.kind.value)

    if args.query:
        fb.filter(args.query)
    fb.warn_empty("No tabs found", "Try a different query?")
    fb.send()


def cmd_config(args: argparse.Namespace, config: Settings) -> None:
    """List workflow configuration items."""
    blacklist_path = Blacklist(config.blacklist_path()).ensure_file()

    fb = Feedback()
    fb.add_item(
        "Edit Action Blacklist",
        subtitle="Open action blacklist in your editor",
        arg=str(blacklist_path),
        valid=True,
        icon=ICON_BLACKLIST,
    ).var("action", "open")
    fb.add_item(
        "User Scripts",
        subtitle="Open user scripts directory in Finder",
        arg=str(config.user_scripts_dir()),
        valid=True,
        icon=ICON_FOLDER,
    ).var("action", "open")

    if args.query:
        fb.filter(args.query)
    fb.warn_empty("No matching items", "Try a different query?")
    fb.send()


# =============================================================================
# RUN SCRIPTS
# =============================================================================


def cmd_action(args: argparse.Namespace, config: Settings) -> None:
    """Run a tab or URL action."""
    dispatcher = _dispatcher(config)
    if args.kind == "tab":
        dispatcher.run_tab_action(args.action, args.window, args.tab, kind=args.action_type)
    else:
        dispatcher.run_url_action(args.action, args.url)


def cmd_activate(args: argparse.Namespace, config: Settings) -> None:
    """Bring a tab to the front."""
    _dispatcher(config).activate(args.window, args.tab)


def cmd_close(args: argparse.Namespace, config: Settings) -> None:
    """Close tab(s)."""
    _dispatcher(config).close(args.window, args.tab, left=args.left, right=args.right)


def cmd_active_tab(args: argparse.Namespace, config: Settings) -> None:
    """Print workflow variables for Safari's current tab."""
    tab = _dispatcher(config).safari.active_tab()
    logger.debug(f"active tab: {tab}")
    print(workflow_variables({
        "ALSF_WINDOW": str(tab.window_index),
        "ALSF_TAB": str(tab.index),
        "ALSF_URL": tab.url,
    }))


def cmd_blacklist(args: argparse.Namespace, config: Settings) -> None:
    """Add action names to the blacklist."""
    Blacklist(config.blacklist_path()).add(args.names)


# Commands whose errors are printed as text rather than as a feedback item
TEXT_ERROR_COMMANDS = {"action", "activate", "close", "blacklist", "active-tab"}


# =============================================================================
# PARSER
# =============================================================================


def _add_window_tab(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-w", "--window", type=int, default=1, help="Window number (default: 1)")
    parser.add_argument("-t", "--tab", type=int, required=True, help="Tab number")


def _add_query(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-q", "--query", default="", help="Search query")
    parser.add_argument(
        "-r", "--max-results", type=int, default=None,
        help="Maximum number of results to send to Alfred (default: ALSF_MAX_RESULTS)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="alsf",
        description="Safari tabs and actions in Alfred.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # actions tab|url
    actions_parser = subparsers.add_parser("actions", aliases=["la"], help="List actions")
    actions_sub = actions_parser.add_subparsers(dest="kind", metavar="TYPE", required=True)
    lta = actions_sub.add_parser("tab", help="List tab actions")
    _add_window_tab(lta)
    lta.add_argument("-u", "--url", required=True, help="URL of the tab")
    _add_query(lta)
    lua = actions_sub.add_parser("url", help="List URL actions")
    lua.add_argument("-u", "--url", required=True, help="URL to action")
    _add_query(lua)
    actions_parser.set_defaults(func=cmd_actions, command="actions")

    # action tab|url
    action_parser = subparsers.add_parser("action", aliases=["A"], help="Run an action")
    action_sub = action_parser.add_subparsers(dest="kind", metavar="TYPE", required=True)
    rta = action_sub.add_parser("tab", help="Run an action on a tab")
    _add_window_tab(rta)
    rta.add_argument("-a", "--action", required=True, metavar="NAME", help="Action name")
    rta.add_argument(
        "--action-type", default="tab", metavar="TYPE",
        help="Action type: tab or url (empty = try both)",
    )
    rua = action_sub.add_parser("url", help="Run an action on a URL")
    rua.add_argument("-a", "--action", required=True, metavar="NAME", help="Action name")
    rua.add_argument("-u", "--url", required=True, help="URL to action")
    action_parser.set_defaults(func=cmd_action, command="action")

    # activate
    activate_parser = subparsers.add_parser("activate", aliases=["a"], help="Activate a tab")
    _add_window_tab(activate_parser)
    activate_parser.set_defaults(func=cmd_activate, command="activate")

    # close
    close_parser = subparsers.add_parser("close", aliases=["c"], help="Close tab(s)")
    _add_window_tab(close_parser)
    close_parser.add_argument("-l", "--left", action="store_true", help="Close tabs to the left")
    close_parser.add_argument("-r", "--right", action="store_true", help="Close tabs to the right")
    close_parser.set_defaults(func=cmd_close, command="close")

    # tabs
    tabs_parser = subparsers.add_parser("tabs", aliases=["t"], help="Filter open tabs")
    _add_query(tabs_parser)
    for key, label in (("ctrl", "CTRL"), ("opt", "OPT (ALT)"), ("fn", "FN"), ("shift", "SHIFT")):
        tabs_parser.add_argument(
            f"--tab-{key}", default=None, metavar="NAME",
            help=f"Action to run for {label} key",
        )
    tabs_parser.set_defaults(func=cmd_tabs, command="tabs")

    # active-tab
    active_parser = subparsers.add_parser(
        "active-tab", aliases=["at"], help="Print workflow variables for the current tab"
    )
    active_parser.set_defaults(func=cmd_active_tab, command="active-tab")

    # blacklist
    blacklist_parser = subparsers.add_parser("blacklist", help="Hide actions from action lists")
    blacklist_parser.add_argument("names", nargs="+", metavar="NAME", help="Action names")
    blacklist_parser.set_defaults(func=cmd_blacklist, command="blacklist")

    # config
    config_parser = subparsers.add_parser("config", help="Show configuration items")
    config_parser.add_argument("-q", "--query", default="", help="Search query")
    config_parser.set_defaults(func=cmd_config, command="config")

    return parser


def report_error(command: str, err: Exception) -> None:
    """Show an error to the user the way Alfred expects for the command."""
    logger.error(f"{type(err).__name__}: {err}")
    if command in TEXT_ERROR_COMMANDS:
        print(str(err))
    else:
        error_feedback(err).send()


def main(argv: list[str] | None = None, config: Settings | None = None) -> None:
    """Main entry point."""
    config = config or settings
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose or config.debug)

    if args.command is None:
        parser.print_help(sys.stderr)
        sys.exit(0)

    func: Callable[[argparse.Namespace, Settings], None] = args.func
    try:
        # User script directories
        for kind in ActionKind:
            (config.user_scripts_dir() / kind.value).mkdir(parents=True, exist_ok=True)
        func(args, config)
    except (AlsfError, OSError) as e:
        report_error(args.command, e)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
