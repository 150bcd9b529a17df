"""Shared fixtures."""

import os
from pathlib import Path

import pytest

from alsf.config import Settings
from alsf.safari import Tab, Window


@pytest.fixture
def write_script():
    """Factory creating a script file (and its directory)."""

    def _write(path: Path, content: str = "", executable: bool = False) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        os.chmod(path, 0o755 if executable else 0o644)
        return path

    return _write


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing every directory into tmp_path."""
    return Settings(
        data_dir=tmp_path / "data",
        cache_dir=tmp_path / "cache",
        workflow_dir=tmp_path / "workflow",
        windows_cache_seconds=0,
        _env_file=None,
    )


@pytest.fixture
def windows() -> list[Window]:
    """Two windows: one with three web tabs, one with a favorites tab."""
    return [
        Window(
            index=1,
            active_tab=2,
            tabs=[
                Tab(index=1, window_index=1, title="Example", url="https://www.example.com/"),
                Tab(index=2, window_index=1, title="Python", url="https://www.python.org/", active=True),
                Tab(index=3, window_index=1, title="News", url="https://news.ycombinator.com/"),
            ],
        ),
        Window(
            index=2,
            active_tab=1,
            tabs=[
                Tab(index=1, window_index=2, title="Favorites", url="favorites://", active=True),
            ],
        ),
    ]
