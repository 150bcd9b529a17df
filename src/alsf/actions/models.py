"""Pydantic models for the action system."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from alsf.icons import ICON_DEFAULT, ICON_TAB, ICON_URL


class ActionKind(str, Enum):
    """What an action operates on.

    Attributes:
        TAB: Action receives a Safari tab (window and tab number).
        URL: Action receives a URL.
    """

    TAB = "tab"
    URL = "url"


class BuiltinKind(str, Enum):
    """Behaviours implemented in code rather than by a script."""

    CLOSE_TAB = "close-tab"
    CLOSE_TABS_OTHER = "close-tabs-other"
    CLOSE_TABS_LEFT = "close-tabs-left"
    CLOSE_TABS_RIGHT = "close-tabs-right"
    CLOSE_WINDOW = "close-window"
    OPEN_URL = "open-url"


def default_icon(kind: ActionKind | str | None) -> str:
    """Get the fallback icon for an action class."""
    if kind == ActionKind.TAB:
        return ICON_TAB
    if kind == ActionKind.URL:
        return ICON_URL
    return ICON_DEFAULT


class Action(BaseModel):
    """A named behaviour that can be run on a tab or a URL.

    An action is either built-in (``builtin`` is set) or backed by a
    script on disk (``script_path`` is set), never both. Its ``kind``
    decides which registry namespace it lives in and what target it
    accepts.
    """

    title: str = Field(description="Display name, unique within its kind")
    kind: ActionKind = Field(description="Whether the action takes a tab or a URL")
    icon: str = Field(default=ICON_DEFAULT, description="Path of the icon shown in Alfred")

    builtin: BuiltinKind | None = Field(
        default=None,
        description="Behaviour of a built-in action",
    )
    script_path: Path | None = Field(
        default=None,
        description="Script backing a script action",
    )

    @model_validator(mode="after")
    def _check_variant(self) -> Action:
        if (self.builtin is None) == (self.script_path is None):
            raise ValueError("Action must have exactly one of 'builtin' or 'script_path'")
        return self

    @property
    def is_builtin(self) -> bool:
        return self.builtin is not None

    @property
    def is_tab_action(self) -> bool:
        return self.kind == ActionKind.TAB

    @property
    def is_url_action(self) -> bool:
        return self.kind == ActionKind.URL

    @classmethod
    def from_script(cls, path: Path, kind: ActionKind, icon: str | None = None) -> Action:
        """Create a script action.

        The title is the script's filename without its extension.

        Args:
            path: Path to the script
            kind: Action class, from the directory the script was found in
            icon: Icon path (default: the class icon)

        Returns:
            The new action
        """
        return cls(
            title=path.stem,
            kind=kind,
            icon=icon or default_icon(kind),
            script_path=path,
        )
