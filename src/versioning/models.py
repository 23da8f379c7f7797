"""Data models for version lookups and their verdicts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from sources.base import Source


class Ecosystem(Enum):
    """Ecosystem a source answers for; versions only compare within one."""
    SYSTEM = "system"
    PYTHON = "python"
    NPM = "npm"
    CARGO = "cargo"
    GO = "go"
    RUBY = "ruby"
    BEAM = "beam"
    DART = "dart"
    PHP = "php"
    JVM = "jvm"
    DOTNET = "dotnet"
    SWIFT = "swift"
    CONTAINER = "container"


class LookupMode(Enum):
    """Lookup strategy selected by the caller."""
    ALL = "all"
    EXPLICIT = "explicit"
    DEFAULT = "default"


class Status(Enum):
    """Verdict for one package."""
    UP_TO_DATE = "up_to_date"
    OUTDATED = "outdated"
    NOT_INSTALLED = "not_installed"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class VersionInfo:
    """A version reported by one source."""
    version: str
    source: str
    local: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"version": self.version, "source": self.source}
        if self.local:
            data["local"] = True
        return data


@dataclass(frozen=True)
class PackageResult:
    """Lookup outcome consumed by output formatting.

    Build instances through the named constructors; ``__post_init__`` rejects
    any combination where ``status`` disagrees with the populated fields.
    """
    package: str
    status: Status
    installed: Optional[VersionInfo] = None
    latest: Optional[VersionInfo] = None
    available: Tuple[VersionInfo, ...] = field(default_factory=tuple)
    also_found_in: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if (self.installed is None) != (self.latest is None) and self.status != Status.NOT_INSTALLED:
            raise ValueError("installed and latest must be populated together")
        if self.status == Status.OUTDATED and self.installed is None:
            raise ValueError("outdated result requires installed and latest versions")
        if self.status == Status.NOT_INSTALLED and (
            self.installed is not None or self.latest is None or not self.available
        ):
            raise ValueError("not_installed result requires latest and available, no installed")
        if self.status == Status.NOT_FOUND and (
            self.installed is not None or self.latest is not None or self.available
        ):
            raise ValueError("not_found result cannot carry versions")
        if self.status == Status.UP_TO_DATE and self.available and self.installed is not None:
            raise ValueError("up_to_date result carries either installed or available")

    @classmethod
    def up_to_date(cls, package: str, info: VersionInfo) -> "PackageResult":
        """Single-source answer: the found version is both installed and latest."""
        return cls(package=package, status=Status.UP_TO_DATE, installed=info, latest=info)

    @classmethod
    def current(
        cls, package: str, installed: VersionInfo, also_found_in: Sequence[str] = ()
    ) -> "PackageResult":
        """Installed copy with no newer same-ecosystem release."""
        return cls(
            package=package,
            status=Status.UP_TO_DATE,
            installed=installed,
            latest=installed,
            also_found_in=tuple(also_found_in),
        )

    @classmethod
    def outdated(
        cls,
        package: str,
        installed: VersionInfo,
        latest: VersionInfo,
        also_found_in: Sequence[str] = (),
    ) -> "PackageResult":
        return cls(
            package=package,
            status=Status.OUTDATED,
            installed=installed,
            latest=latest,
            also_found_in=tuple(also_found_in),
        )

    @classmethod
    def not_installed(cls, package: str, available: Sequence[VersionInfo]) -> "PackageResult":
        """Not installed locally; the first available entry is reported as latest."""
        available = tuple(available)
        return cls(
            package=package,
            status=Status.NOT_INSTALLED,
            latest=available[0] if available else None,
            available=available,
        )

    @classmethod
    def found(cls, package: str, available: Sequence[VersionInfo]) -> "PackageResult":
        """All-sources listing; empty ``available`` means not found."""
        available = tuple(available)
        if not available:
            return cls.not_found(package)
        return cls(package=package, status=Status.UP_TO_DATE, available=available)

    @classmethod
    def not_found(cls, package: str) -> "PackageResult":
        return cls(package=package, status=Status.NOT_FOUND)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready mapping; empty optional fields are omitted."""
        data: Dict[str, Any] = {"package": self.package, "status": self.status.value}
        if self.installed is not None:
            data["installed"] = self.installed.to_dict()
        if self.latest is not None:
            data["latest"] = self.latest.to_dict()
        if self.available:
            data["available"] = [v.to_dict() for v in self.available]
        if self.also_found_in:
            data["also_found_in"] = list(self.also_found_in)
        return data


@dataclass
class LookupRequest:
    """One package to resolve against a list of sources."""
    package: str
    sources: List[Source]
    mode: LookupMode
