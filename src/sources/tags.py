"""Tag-listing sources: GitHub repositories (Swift packages) and Docker Hub images."""

from __future__ import annotations

import os
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import semantic_version

from constants import Constants
from common.http_client import get_json
from versioning.models import Ecosystem
from .base import Source, strip_v

_BASE_VERSION = re.compile(r"[0-9.]*", re.ASCII)


def parse_github_repo(package: str) -> Optional[Tuple[str, str]]:
    """Accept "owner/repo" or a github.com URL; return (owner, repo)."""
    cleaned = package
    for prefix in ("https://", "http://", "github.com/"):
        if cleaned.startswith(prefix):
            cleaned = cleaned[len(prefix):]
    if cleaned.endswith(".git"):
        cleaned = cleaned[: -len(".git")]
    cleaned = cleaned.rstrip("/")

    parts = cleaned.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return None
    return parts[0], parts[1]


def parse_github_tags(data: Any) -> Optional[str]:
    """First tag name in the GitHub tags listing, "v" stripped."""
    if not isinstance(data, list) or not data:
        return None
    first = data[0]
    name = first.get("name") if isinstance(first, dict) else None
    return strip_v(name) if isinstance(name, str) and name else None


class SwiftSource(Source):
    """Swift packages are GitHub repositories; the newest tag is the latest release."""

    name = "swift"
    ecosystem = Ecosystem.SWIFT

    def query_version(self, package: str) -> Optional[str]:
        repo = parse_github_repo(package)
        if repo is None:
            return None
        owner, name = repo
        headers: Dict[str, str] = {"Accept": "application/vnd.github+json"}
        token = os.environ.get(Constants.ENV_GITHUB_TOKEN)
        if token:
            headers["Authorization"] = f"token {token}"
        url = f"{Constants.GITHUB_API_BASE}/repos/{quote(owner, safe='')}/{quote(name, safe='')}/tags"
        return parse_github_tags(get_json(url, context=self.name, headers=headers))


def pad_version(version: str) -> str:
    """Pad the leading numeric part of a tag to three components ("3.21-alpine" -> "3.21.0")."""
    base = _BASE_VERSION.match(version).group(0)
    parts = base.split(".")
    if len(parts) == 1:
        return f"{parts[0]}.0.0"
    if len(parts) == 2:
        return f"{parts[0]}.{parts[1]}.0"
    return base


def parse_docker_tags(data: Any) -> Optional[str]:
    """Return the tag with the highest semver-like version; non-version tags are ignored."""
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        return None

    versions: List[Tuple[semantic_version.Version, str]] = []
    for entry in results:
        tag = entry.get("name") if isinstance(entry, dict) else None
        if not isinstance(tag, str):
            continue
        clean = strip_v(tag)
        if not clean[:1].isdigit() or not clean[:1].isascii():
            continue
        try:
            versions.append((semantic_version.Version(pad_version(clean)), tag))
        except ValueError:
            continue  # "1.2.3.4" and friends

    if not versions:
        return None
    # max() keeps the first tag among equal versions ("3.21" before "3.21-alpine")
    return max(versions, key=lambda item: item[0])[1]


class DockerSource(Source):
    """Docker Hub image tags; bare names resolve to official ``library/`` images."""

    name = "docker"
    ecosystem = Ecosystem.CONTAINER

    def query_version(self, package: str) -> Optional[str]:
        if not package:
            return None
        repo_path = package if "/" in package else f"library/{package}"
        url = f"{Constants.REGISTRY_URL_DOCKER}{quote(repo_path, safe='/')}/tags"
        data = get_json(url, context=self.name, params={"page_size": Constants.DOCKER_TAGS_PAGE_SIZE})
        return parse_docker_tags(data)
