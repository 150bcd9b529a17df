"""Tab and URL actions.

Built-in actions are implemented in code; script actions are files found
in ``tab`` and ``url`` script directories.

Example:
    from alsf.actions import create_default_registry, run_action

    registry = create_default_registry()
    registry.load_scripts(settings.script_dirs())
    action = registry.find("Close Tab", ActionKind.TAB)
    run_action(action, tab)
"""

from alsf.actions.blacklist import Blacklist
from alsf.actions.loader import discover_scripts
from alsf.actions.models import Action, ActionKind, BuiltinKind
from alsf.actions.registry import ActionRegistry, create_default_registry
from alsf.actions.runner import InvocationPlan, invocation_plan, run_action

__all__ = [
    # Models
    "Action",
    "ActionKind",
    "BuiltinKind",
    # Registry
    "ActionRegistry",
    "create_default_registry",
    "discover_scripts",
    # Blacklist
    "Blacklist",
    # Execution
    "InvocationPlan",
    "invocation_plan",
    "run_action",
]
