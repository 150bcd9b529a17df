"""Type definitions for Safari windows and tabs.

Field aliases match the JSON emitted by the JXA bridge programs.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Tab(BaseModel):
    """A Safari tab.

    Attributes:
        index: 1-based position of the tab in its window.
        window_index: 1-based position of the window (1 = frontmost).
        title: Page title.
        url: Page URL.
        active: Whether this is the current tab of its window.
    """

    model_config = ConfigDict(populate_by_name=True)

    index: int = Field(description="Tab number")
    window_index: int = Field(alias="windowIndex", description="Window number")
    title: str = Field(default="", description="Page title")
    url: str = Field(default="", description="Page URL")
    active: bool = Field(default=False, description="Current tab of its window")

    @field_validator("title", "url", mode="before")
    @classmethod
    def _missing_value(cls, v: Any) -> Any:
        # Safari reports `missing value` (null) for blank and Favorites tabs
        return "" if v is None else v


class Window(BaseModel):
    """A Safari browser window and its tabs."""

    model_config = ConfigDict(populate_by_name=True)

    index: int = Field(description="Window number")
    active_tab: int = Field(default=0, alias="activeTab", description="Number of current tab")
    tabs: list[Tab] = Field(default_factory=list, description="Tabs in window order")

    def get_tab(self, index: int) -> Tab | None:
        """Get a tab by its number.

        Args:
            index: 1-based tab number.

        Returns:
            The tab or None if the window has no such tab.
        """
        for tab in self.tabs:
            if tab.index == index:
                return tab
        return None
