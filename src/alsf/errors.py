"""Exceptions raised by the action system."""


class AlsfError(Exception):
    """Base class for workflow errors."""

    pass


class UnknownActionError(AlsfError):
    """Raised when no action with the requested title is registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown action: {name}")


class TabNotFoundError(AlsfError):
    """Raised when a window/tab index pair matches no open tab."""

    def __init__(self, window: int, tab: int) -> None:
        self.window = window
        self.tab = tab
        super().__init__(f"Tab not found: {window}x{tab}")


class ScriptError(AlsfError):
    """Raised when an action script can't be run or exits with an error."""

    pass


class RegistrationError(AlsfError):
    """Raised when an action can't be placed in the registry."""

    pass


class InvalidTargetError(AlsfError):
    """Raised when an action is run against the wrong kind of target."""

    pass
