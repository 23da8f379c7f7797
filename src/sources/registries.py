"""Registry sources whose responses need more than a fixed JSON path."""

from __future__ import annotations

from typing import Any, Optional, Tuple
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json
from versioning.models import Ecosystem
from .base import Source, strip_v


class ComposerSource(Source):
    """Packagist (PHP) metadata; packages are "vendor/name"."""

    name = "composer"
    ecosystem = Ecosystem.PHP

    def query_version(self, package: str) -> Optional[str]:
        if "/" not in package:
            return None
        data = get_json(f"{Constants.REGISTRY_URL_COMPOSER}{quote(package, safe='/')}.json", context=self.name)
        return parse_composer_response(data, package)


def parse_composer_response(data: Any, package: str) -> Optional[str]:
    try:
        version = data["packages"][package][0]["version"]
    except (KeyError, IndexError, TypeError):
        return None
    return strip_v(version) if isinstance(version, str) and version else None


def parse_maven_coordinates(package: str) -> Optional[Tuple[str, str]]:
    """Split "groupId:artifactId"; anything else is rejected."""
    parts = package.split(":")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return None
    return parts[0], parts[1]


class MavenSource(Source):
    """Maven Central search API; packages are "groupId:artifactId"."""

    name = "maven"
    ecosystem = Ecosystem.JVM

    def query_version(self, package: str) -> Optional[str]:
        coords = parse_maven_coordinates(package)
        if coords is None:
            return None
        group, artifact = coords
        params = {"q": f"g:{group} AND a:{artifact}", "rows": 1, "wt": "json"}
        data = get_json(Constants.REGISTRY_URL_MAVEN, context=self.name, params=params)
        return parse_maven_response(data)


def parse_maven_response(data: Any) -> Optional[str]:
    try:
        version = data["response"]["docs"][0]["latestVersion"]
    except (KeyError, IndexError, TypeError):
        return None
    return version if isinstance(version, str) and version else None


class NuGetSource(Source):
    """NuGet flat container index; prereleases are skipped."""

    name = "nuget"
    ecosystem = Ecosystem.DOTNET

    def query_version(self, package: str) -> Optional[str]:
        if not package:
            return None
        # Package IDs are case-insensitive; the flat container requires lowercase
        url = f"{Constants.REGISTRY_URL_NUGET}{quote(package.lower(), safe='')}/index.json"
        return parse_nuget_versions(get_json(url, context=self.name))


def parse_nuget_versions(data: Any) -> Optional[str]:
    versions = data.get("versions") if isinstance(data, dict) else None
    if not isinstance(versions, list):
        return None
    stable = [v for v in versions if isinstance(v, str) and "-" not in v]
    return stable[-1] if stable else None
