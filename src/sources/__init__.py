"""Source registry.

The table below is the single place sources are declared. Its order is the
default precedence used when no configuration overrides it: local probes and
system package managers first, then language registries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from versioning.models import Ecosystem
from .base import Source
from .json_api import cargo_source, gem_source, go_source, hex_source, npm_source, pub_source
from .path import PathSource
from .python import CondaSource, PipSource, UvSource
from .registries import ComposerSource, MavenSource, NuGetSource
from .system import AptSource, BrewSource
from .tags import DockerSource, SwiftSource


@dataclass(frozen=True)
class SourceSpec:
    """Registry row: identity of a source plus how to build it."""

    name: str
    ecosystem: Ecosystem
    is_local: bool
    factory: Callable[[], Source]


SOURCES = (
    SourceSpec("path", Ecosystem.SYSTEM, True, PathSource),
    SourceSpec("brew", Ecosystem.SYSTEM, False, BrewSource),
    SourceSpec("apt", Ecosystem.SYSTEM, False, AptSource),
    SourceSpec("npm", Ecosystem.NPM, False, npm_source),
    SourceSpec("uv", Ecosystem.PYTHON, True, UvSource),
    SourceSpec("pip", Ecosystem.PYTHON, True, PipSource),
    SourceSpec("conda", Ecosystem.PYTHON, False, CondaSource),
    SourceSpec("go", Ecosystem.GO, False, go_source),
    SourceSpec("cargo", Ecosystem.CARGO, False, cargo_source),
    SourceSpec("gem", Ecosystem.RUBY, False, gem_source),
    SourceSpec("hex", Ecosystem.BEAM, False, hex_source),
    SourceSpec("pub", Ecosystem.DART, False, pub_source),
    SourceSpec("composer", Ecosystem.PHP, False, ComposerSource),
    SourceSpec("maven", Ecosystem.JVM, False, MavenSource),
    SourceSpec("nuget", Ecosystem.DOTNET, False, NuGetSource),
    SourceSpec("swift", Ecosystem.SWIFT, False, SwiftSource),
    SourceSpec("docker", Ecosystem.CONTAINER, False, DockerSource),
)

_BY_NAME = {spec.name: spec for spec in SOURCES}


def is_known_source(name: str) -> bool:
    return name in _BY_NAME


def source_by_name(name: str) -> Optional[Source]:
    """Build the source registered as ``name``; None for unknown names."""
    spec = _BY_NAME.get(name)
    return spec.factory() if spec is not None else None


def all_sources() -> List[Source]:
    """Fresh instances of every registered source, in declaration order."""
    return [spec.factory() for spec in SOURCES]


def default_precedence() -> List[str]:
    return [spec.name for spec in SOURCES]


def sources_from_names(names: Iterable[str]) -> List[Source]:
    """Build sources for ``names`` in the given order, skipping unknown ones."""
    return [source for source in (source_by_name(name) for name in names) if source is not None]


__all__ = [
    "Source",
    "SourceSpec",
    "SOURCES",
    "all_sources",
    "default_precedence",
    "is_known_source",
    "source_by_name",
    "sources_from_names",
]
