"""File-backed TTL cache for registry lookups.

One JSON file per (source, package) pair holds ``{"version", "timestamp"}``.
The cache is advisory: every I/O or decode failure degrades to a miss and a
failed write is simply dropped, so cache trouble never fails a lookup.
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Optional

from constants import Constants
from common.logging_utils import extra_context

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached version and the time (epoch seconds) it was stored."""

    version: str
    timestamp: int

    def is_expired(self, now: float, ttl: int) -> bool:
        return now - self.timestamp >= ttl


def sanitize(name: str) -> str:
    """Make ``name`` safe for use in a file name."""
    return "".join(c if c.isalnum() or c in "-_" else "_" for c in name)


def default_cache_dir() -> Path:
    """Resolve the cache directory from the environment."""
    override = os.environ.get(Constants.ENV_CACHE_DIR)
    if override:
        return Path(override)
    base = os.environ.get("XDG_CACHE_HOME") or os.path.join(os.path.expanduser("~"), ".cache")
    return Path(base) / Constants.CACHE_DIR_NAME


class VersionCache:
    """TTL cache for registry versions, persisted under ``cache_dir``."""

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        ttl: int = Constants.CACHE_TTL_SEC,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the cache.

        Args:
            cache_dir: Storage directory; defaults to ``default_cache_dir()``.
            ttl: Time-to-live in seconds.
            clock: Source of the current epoch time.
        """
        self._dir = Path(cache_dir) if cache_dir is not None else default_cache_dir()
        self._ttl = ttl
        self._clock = clock

    @property
    def cache_dir(self) -> Path:
        return self._dir

    def path_for(self, source: str, package: str) -> Path:
        """Return the file holding the entry for ``source``/``package``."""
        return self._dir / f"{source}-{sanitize(package)}.json"

    def get(self, source: str, package: str) -> Optional[str]:
        """Return the cached version, or None if absent, unreadable or expired.

        Expired entries are deleted as soon as they are read.
        """
        path = self.path_for(source, package)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            entry = CacheEntry(version=str(raw["version"]), timestamp=int(raw["timestamp"]))
        except FileNotFoundError:
            return None
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.debug("Ignoring unreadable cache entry %s: %s", path, exc)
            return None

        if entry.is_expired(self._clock(), self._ttl):
            try:
                path.unlink()
            except OSError:
                pass  # still a miss
            logger.debug(
                "Cache entry expired",
                extra=extra_context(event="cache_expired", component="cache", source=source, package=package),
            )
            return None

        logger.debug(
            "Cache hit",
            extra=extra_context(event="cache_hit", component="cache", source=source, package=package),
        )
        return entry.version

    def set(self, source: str, package: str, version: str) -> bool:
        """Store ``version``; returns False when it could not be persisted."""
        entry = CacheEntry(version=version, timestamp=int(self._clock()))
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            self.path_for(source, package).write_text(json.dumps(asdict(entry)), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            logger.debug(
                "Cache write failed: %s",
                exc,
                extra=extra_context(event="cache_write", component="cache", outcome="error", source=source),
            )
            return False
        return True
