"""Safari Assistant - search and act on Safari tabs from Alfred."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("alfred-safari-assistant")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from alsf.actions import Action, ActionKind, ActionRegistry, create_default_registry
from alsf.dispatch import Dispatcher

__all__ = ["Action", "ActionKind", "ActionRegistry", "Dispatcher", "create_default_registry"]
