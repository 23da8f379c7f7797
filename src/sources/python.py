"""Python ecosystem sources: uv projects, pip installs and conda channels."""

from __future__ import annotations

import json
import logging
import os
import tomllib
from typing import Optional

from constants import Constants
from common.subprocess_utils import command_exists, run_for_output
from versioning.models import Ecosystem
from .base import Source, extract_version_field

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    """Compare Python distribution names case- and separator-insensitively."""
    return name.replace("-", "_").replace(".", "_").lower()


class UvSource(Source):
    """Version pinned in the current uv project (``uv.lock``, then ``uv pip show``)."""

    name = "uv"
    ecosystem = Ecosystem.PYTHON
    is_local = True

    def __init__(self, project_dir: str = "."):
        self._project_dir = project_dir

    def _path(self, name: str) -> str:
        return os.path.join(self._project_dir, name)

    def is_uv_project(self) -> bool:
        return os.path.isfile(self._path(Constants.UV_LOCK_FILE)) or (
            os.path.isfile(self._path(Constants.PYPROJECT_FILE)) and os.path.isdir(self._path(".venv"))
        )

    def query_version(self, package: str) -> Optional[str]:
        if not self.is_uv_project():
            return None
        version = parse_uv_lock(self._path(Constants.UV_LOCK_FILE), package)
        if version:
            return version
        if not command_exists("uv"):
            return None
        out = run_for_output(["uv", "pip", "show", package])
        return extract_version_field(out) if out else None


def parse_uv_lock(lockfile_path: str, package: str) -> Optional[str]:
    """Return the locked version of ``package`` from a uv.lock file."""
    try:
        with open(lockfile_path, "rb") as f:
            data = tomllib.load(f) or {}
    except FileNotFoundError:
        return None
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug("Failed to read uv.lock: %s", e)
        return None

    wanted = normalize_name(package)
    for entry in data.get("package", []):
        if isinstance(entry, dict) and normalize_name(str(entry.get("name", ""))) == wanted:
            version = entry.get("version")
            return str(version) if version else None
    return None


class PipSource(Source):
    """Version of a distribution installed in the active pip environment."""

    name = "pip"
    ecosystem = Ecosystem.PYTHON
    is_local = True

    def query_version(self, package: str) -> Optional[str]:
        pip = next((cmd for cmd in ("pip", "pip3") if command_exists(cmd)), None)
        if pip is None:
            return None
        out = run_for_output([pip, "show", package])
        return extract_version_field(out) if out else None


class CondaSource(Source):
    """Newest version published on the configured conda channels."""

    name = "conda"
    ecosystem = Ecosystem.PYTHON

    def query_version(self, package: str) -> Optional[str]:
        if not command_exists("conda"):
            return None
        out = run_for_output(["conda", "search", package, "--json"])
        return parse_conda_output(out, package) if out else None


def parse_conda_output(text: str, package: str) -> Optional[str]:
    # {"<package>": [{"version": ...}, ...]}, sorted oldest to newest
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    versions = data.get(package)
    if not isinstance(versions, list) or not versions:
        return None
    last = versions[-1]
    if isinstance(last, dict) and isinstance(last.get("version"), str):
        return last["version"]
    return None
