"""Safari scripting bridge."""

from alsf.safari.bridge import BridgeError, Safari
from alsf.safari.types import Tab, Window

__all__ = ["BridgeError", "Safari", "Tab", "Window"]
