"""Base class and shared text helpers for version sources."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Optional

from versioning.models import Ecosystem

# Compiled once at import; read-only afterwards.
VERSION_PATTERN = re.compile(r"v?(\d+\.\d+(?:\.\d+)?(?:-[a-zA-Z0-9.-]+)?)", re.ASCII)


class Source(ABC):
    """A place that can report a version for a package name.

    Subclasses are stateless descriptors: ``name`` is the stable identifier
    used on the command line and in cache keys, ``ecosystem`` scopes version
    comparison, and ``is_local`` marks sources that describe what is
    installed on this machine (never cached).
    """

    name: str = ""
    ecosystem: Ecosystem = Ecosystem.SYSTEM
    is_local: bool = False

    @abstractmethod
    def query_version(self, package: str) -> Optional[str]:
        """Return the version this source reports for ``package``, or None.

        Implementations must not raise for ordinary failures (missing tool,
        non-zero exit, network error, unparseable output).
        """

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} ({self.ecosystem.value}{', local' if self.is_local else ''})>"


def extract_version(text: str) -> Optional[str]:
    """Return the first version-looking token in ``text`` without a "v" prefix."""
    if not text:
        return None
    match = VERSION_PATTERN.search(text)
    return match.group(1) if match else None


def extract_version_field(text: str) -> Optional[str]:
    """Return the value of the first ``Version:`` line (apt, pip show)."""
    for line in (text or "").splitlines():
        if line.startswith("Version:"):
            return line[len("Version:"):].strip()
    return None


def strip_v(version: str) -> str:
    """Drop a single leading "v" from a tag-style version."""
    return version[1:] if version.startswith("v") else version
