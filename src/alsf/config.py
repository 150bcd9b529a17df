"""Configuration management for the Safari Assistant workflow."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default per-user directories (Alfred overrides these via its env vars)
ALSF_DIR = Path.home() / ".alsf"
ALSF_ENV_FILE = ALSF_DIR / ".env"

# src/alsf/config.py -> src/alsf -> src -> project root
_PROJECT_DIR = Path(__file__).resolve().parent.parent.parent

BLACKLIST_FILENAME = "blacklist.txt"
WINDOWS_CACHE_FILENAME = "windows.json"


class Settings(BaseSettings):
    """Workflow settings loaded from environment variables.

    Alfred exports ``alfred_workflow_data``, ``alfred_workflow_cache`` and
    ``alfred_debug`` to every script it runs; the configuration sheet
    variables arrive as ``ALSF_*``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ALSF_",
        # Later files override earlier ones
        env_file=(str(ALSF_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Directories
    data_dir: Path = Field(
        default=ALSF_DIR,
        validation_alias=AliasChoices("data_dir", "ALSF_DATA_DIR", "alfred_workflow_data"),
        description="Per-user data directory (blacklist, user scripts)",
    )
    cache_dir: Path = Field(
        default=ALSF_DIR / "cache",
        validation_alias=AliasChoices("cache_dir", "ALSF_CACHE_DIR", "alfred_workflow_cache"),
        description="Cache directory (window/tab snapshot)",
    )
    workflow_dir: Path = Field(
        default=_PROJECT_DIR,
        description="Directory containing the bundled scripts/ tree",
    )

    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("debug", "ALSF_DEBUG", "alfred_debug"),
        description="Enable debug logging",
    )

    windows_cache_seconds: float = Field(
        default=5.0,
        description="How long a snapshot of Safari's windows stays fresh",
    )
    max_results: int = Field(
        default=100,
        description="Maximum number of results sent to Alfred",
    )

    # Modifier actions for tab results (action titles, empty = unset)
    tab_ctrl: str = Field(default="", description="Tab action for CTRL")
    tab_opt: str = Field(default="", description="Tab action for OPT (ALT)")
    tab_fn: str = Field(default="", description="Tab action for FN")
    tab_shift: str = Field(default="", description="Tab action for SHIFT")

    def blacklist_path(self) -> Path:
        """Get the path of the action blacklist file."""
        return self.data_dir / BLACKLIST_FILENAME

    def user_scripts_dir(self) -> Path:
        """Get the directory holding user-installed action scripts."""
        return self.data_dir / "scripts"

    def bundled_scripts_dir(self) -> Path:
        """Get the directory holding the scripts shipped with the workflow."""
        return self.workflow_dir / "scripts"

    def script_dirs(self) -> list[Path]:
        """Get all script discovery roots.

        User directories come last, so their scripts are registered after
        (and therefore shadow) bundled scripts and built-ins.

        Returns:
            List of directories in registration order.
        """
        dirs = []
        for base in (self.bundled_scripts_dir(), self.user_scripts_dir()):
            dirs.append(base / "tab")
            dirs.append(base / "url")
        return dirs

    def windows_cache_path(self) -> Path:
        """Get the path of the window/tab snapshot cache file."""
        return self.cache_dir / WINDOWS_CACHE_FILENAME

    def tab_modifiers(self) -> dict[str, str]:
        """Get configured tab modifier actions keyed by Alfred modifier name."""
        return {
            "ctrl": self.tab_ctrl,
            "shift": self.tab_shift,
            "alt": self.tab_opt,
            "fn": self.tab_fn,
        }


# Global settings instance
settings = Settings()
