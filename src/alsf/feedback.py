"""Alfred Script Filter feedback.

Builds the JSON document Alfred reads from a Script Filter's stdout.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, TextIO

from pydantic import BaseModel, Field

from alsf.icons import ICON_ERROR, ICON_WARNING

logger = logging.getLogger(__name__)


class Modifier(BaseModel):
    """Alternate action of an item, shown while a modifier key is held."""

    subtitle: str | None = None
    arg: str | None = None
    valid: bool = True
    variables: dict[str, str] = Field(default_factory=dict)

    def var(self, name: str, value: str) -> Modifier:
        self.variables[name] = value
        return self


class Item(BaseModel):
    """A single Alfred result."""

    title: str
    subtitle: str = ""
    arg: str | None = None
    uid: str | None = None
    icon: str | None = None
    valid: bool = False
    match: str | None = None
    copytext: str | None = None
    variables: dict[str, str] = Field(default_factory=dict)
    mods: dict[str, Modifier] = Field(default_factory=dict)

    def var(self, name: str, value: str) -> Item:
        """Set a workflow variable and return the item for chaining."""
        self.variables[name] = value
        return self

    def modifier(self, key: str, subtitle: str | None = None, valid: bool = True) -> Modifier:
        """Add an alternate action for a modifier key.

        Args:
            key: Alfred modifier name (cmd, alt, ctrl, shift, fn)
            subtitle: Subtitle shown while the key is held
            valid: Whether the item can be actioned with this key

        Returns:
            The new Modifier
        """
        mod = Modifier(subtitle=subtitle, valid=valid)
        self.mods[key] = mod
        return mod

    def search_key(self) -> str:
        return self.match if self.match is not None else self.title

    def to_alfred(self) -> dict[str, Any]:
        """Convert to Alfred's JSON structure."""
        data: dict[str, Any] = {
            "title": self.title,
            "subtitle": self.subtitle,
            "valid": self.valid,
        }
        for key in ("arg", "uid", "match"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.icon:
            data["icon"] = {"path": self.icon}
        if self.copytext is not None:
            data["text"] = {"copy": self.copytext}
        if self.variables:
            data["variables"] = dict(self.variables)
        if self.mods:
            data["mods"] = {
                key: mod.model_dump(exclude_none=True)
                for key, mod in self.mods.items()
            }
        return data


class Feedback:
    """Collects items and writes them to Alfred.

    Example:
        fb = Feedback()
        fb.add_item("Close Tab", arg="Close Tab", valid=True)
        fb.filter(query)
        fb.warn_empty("No actions found", "Try a different query?")
        fb.send()
    """

    def __init__(self, max_results: int = 0) -> None:
        """Initialize the feedback.

        Args:
            max_results: Maximum number of items sent (0 = unlimited)
        """
        self.items: list[Item] = []
        self.max_results = max_results

    def add_item(self, title: str, **kwargs: Any) -> Item:
        item = Item(title=title, **kwargs)
        self.items.append(item)
        return item

    def filter(self, query: str) -> list[Item]:
        """Keep only items matching every word of the query.

        Matching is a case-insensitive substring test on each item's
        match string (or title).

        Returns:
            The remaining items
        """
        words = query.lower().split()
        if words:
            self.items = [
                it for it in self.items
                if all(w in it.search_key().lower() for w in words)
            ]
        logger.debug(f"{len(self.items)} result(s) for {query!r}")
        return self.items

    def warn_empty(self, title: str, subtitle: str = "") -> None:
        """Add a warning item if there are no items."""
        if not self.items:
            self.add_item(title, subtitle=subtitle, icon=ICON_WARNING)

    def to_alfred(self) -> dict[str, Any]:
        items = self.items
        if self.max_results > 0:
            items = items[: self.max_results]
        return {"items": [it.to_alfred() for it in items]}

    def send(self, stream: TextIO | None = None) -> None:
        """Write the feedback JSON to stdout."""
        stream = stream or sys.stdout
        json.dump(self.to_alfred(), stream)
        stream.write("\n")
        stream.flush()


def error_feedback(err: Exception) -> Feedback:
    """Build feedback that shows an error as a single item."""
    fb = Feedback()
    fb.add_item(str(err), subtitle="Check the workflow's debug log for details", icon=ICON_ERROR)
    return fb


def workflow_variables(variables: dict[str, str], arg: str = "") -> str:
    """Encode workflow variables for a Run Script action's output.

    Returns:
        JSON understood by Alfred's ``alfredworkflow`` protocol
    """
    return json.dumps({"alfredworkflow": {"arg": arg, "variables": variables}})
