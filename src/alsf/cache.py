"""Short-lived cache of Safari's windows and tabs.

Asking Safari for its windows takes about half a second, and a single
Alfred session calls the workflow several times (list tabs, list
actions, run action), so the snapshot is kept in a JSON file for a few
seconds. Commands that close tabs invalidate it.
"""

import json
import logging
import time
from pathlib import Path
from typing import Callable

from filelock import FileLock
from pydantic import TypeAdapter, ValidationError

from alsf.safari.types import Window

logger = logging.getLogger(__name__)

_WINDOWS = TypeAdapter(list[Window])


class WindowsCache:
    """JSON file cache for a list of Safari windows.

    Example:
        cache = WindowsCache(settings.windows_cache_path(), max_age=5)
        windows = cache.load_or_store(Safari().windows)
    """

    def __init__(self, path: str | Path, max_age: float = 5.0) -> None:
        """Initialize the cache.

        Args:
            path: Path to the cache file.
            max_age: Seconds a stored snapshot stays fresh. 0 disables caching.
        """
        self._path = Path(path)
        # The lock file lives beside the cache file
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = FileLock(str(self._path.with_suffix(".lock")))
        self.max_age = max_age

    @property
    def path(self) -> Path:
        """Get the cache file path."""
        return self._path

    def is_fresh(self) -> bool:
        """Check whether a cached snapshot exists and is young enough."""
        if self.max_age <= 0 or not self._path.exists():
            return False
        age = time.time() - self._path.stat().st_mtime
        return age < self.max_age

    def load(self) -> list[Window] | None:
        """Read the cached snapshot.

        Returns:
            The windows, or None if the cache is stale, missing or corrupt.
        """
        with self._lock:
            if not self.is_fresh():
                return None
            try:
                data = json.loads(self._path.read_text(encoding="utf-8"))
                return _WINDOWS.validate_python(data)
            except (json.JSONDecodeError, ValidationError) as e:
                logger.warning(f"Ignoring corrupt windows cache {self._path}: {e}")
                return None

    def store(self, windows: list[Window]) -> None:
        """Write a snapshot to the cache file."""
        with self._lock:
            content = _WINDOWS.dump_json(windows, by_alias=True)
            self._path.write_bytes(content)
            logger.debug(f"Cached {len(windows)} window(s) in {self._path}")

    def load_or_store(self, fetch: Callable[[], list[Window]]) -> list[Window]:
        """Return the cached snapshot, fetching and caching a new one if stale.

        Args:
            fetch: Called to get the current windows when the cache is stale.

        Returns:
            List of windows.
        """
        windows = self.load()
        if windows is not None:
            logger.debug(f"Loaded {len(windows)} window(s) from cache")
            return windows

        windows = fetch()
        if self.max_age > 0:
            self.store(windows)
        return windows

    def invalidate(self) -> None:
        """Delete the cached snapshot."""
        with self._lock:
            if self._path.exists():
                self._path.unlink()
                logger.debug(f"Invalidated windows cache {self._path}")
