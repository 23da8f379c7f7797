"""Registries exposing the latest version at a fixed JSON path."""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json
from versioning.models import Ecosystem
from .base import Source, strip_v


def dig(data: Any, path: Sequence[str]) -> Optional[str]:
    """Follow ``path`` through nested dicts; return the leaf if it is a string."""
    current = data
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current if isinstance(current, str) and current else None


def escape_go_module(module: str) -> str:
    """Apply the module proxy's case encoding ("Azure" -> "!azure")."""
    escaped = "".join("!" + c.lower() if c.isupper() else c for c in module)
    return quote(escaped, safe="/!")


class JsonApiSource(Source):
    """Source backed by ``GET <url>`` returning JSON with the version at ``version_path``."""

    def __init__(
        self,
        name: str,
        ecosystem: Ecosystem,
        url_template: str,
        version_path: Sequence[str],
        encode: Callable[[str], str] = lambda pkg: quote(pkg, safe=""),
    ):
        self.name = name
        self.ecosystem = ecosystem
        self.url_template = url_template
        self.version_path = tuple(version_path)
        self._encode = encode

    def url_for(self, package: str) -> str:
        return self.url_template.format(package=self._encode(package))

    def query_version(self, package: str) -> Optional[str]:
        if not package:
            return None
        data = get_json(self.url_for(package), context=self.name)
        version = dig(data, self.version_path)
        return strip_v(version) if version else None


def npm_source() -> JsonApiSource:
    return JsonApiSource(
        "npm",
        Ecosystem.NPM,
        Constants.REGISTRY_URL_NPM + "{package}/latest",
        ("version",),
        encode=lambda pkg: quote(pkg, safe="@"),
    )


def cargo_source() -> JsonApiSource:
    return JsonApiSource(
        "cargo",
        Ecosystem.CARGO,
        Constants.REGISTRY_URL_CARGO + "{package}",
        ("crate", "max_stable_version"),
    )


def go_source() -> JsonApiSource:
    return JsonApiSource(
        "go",
        Ecosystem.GO,
        Constants.REGISTRY_URL_GO + "{package}/@latest",
        ("Version",),
        encode=escape_go_module,
    )


def gem_source() -> JsonApiSource:
    return JsonApiSource(
        "gem",
        Ecosystem.RUBY,
        Constants.REGISTRY_URL_GEM + "{package}.json",
        ("version",),
    )


def hex_source() -> JsonApiSource:
    return JsonApiSource(
        "hex",
        Ecosystem.BEAM,
        Constants.REGISTRY_URL_HEX + "{package}",
        ("latest_stable_version",),
    )


def pub_source() -> JsonApiSource:
    return JsonApiSource(
        "pub",
        Ecosystem.DART,
        Constants.REGISTRY_URL_PUB + "{package}",
        ("latest", "version"),
    )
