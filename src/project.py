"""Project file detection: find the dependency manifest in a directory and list its packages."""

from __future__ import annotations

import json
import logging
import os
import re
import tomllib
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import requirements

from constants import Constants

logger = logging.getLogger(__name__)

# Distribution name at the start of a PEP 508 requirement ("flask>=3.0" -> "flask")
_REQUIREMENT_NAME = re.compile(r"[A-Za-z0-9._-]+")


@dataclass
class ProjectInfo:
    """Manifest found in a project directory.

    Attributes:
        file_name: Manifest file name, for display.
        source: Source used for its packages ("cargo", "npm", "pip", "go").
        packages: Dependency names in file order.
    """

    file_name: str
    source: str
    packages: List[str] = field(default_factory=list)


def _read_text(path: str) -> Optional[str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None


def _load_toml(path: str) -> Optional[dict]:
    body = _read_text(path)
    if body is None:
        return None
    try:
        return tomllib.loads(body)
    except tomllib.TOMLDecodeError as e:
        logger.debug("Invalid TOML in %s: %s", path, e)
        return None


def _unique(names: List[str]) -> List[str]:
    return list(dict.fromkeys(n for n in names if n))


def scan_cargo(directory: str) -> List[str]:
    doc = _load_toml(os.path.join(directory, Constants.CARGO_TOML_FILE)) or {}
    packages: List[str] = []
    for section in ("dependencies", "dev-dependencies", "build-dependencies"):
        deps = doc.get(section)
        if isinstance(deps, dict):
            packages.extend(deps.keys())
    return _unique(packages)


def scan_npm(directory: str) -> List[str]:
    body = _read_text(os.path.join(directory, Constants.PACKAGE_JSON_FILE))
    if body is None:
        return []
    try:
        doc = json.loads(body)
    except ValueError as e:
        logger.debug("Invalid package.json: %s", e)
        return []
    if not isinstance(doc, dict):
        return []
    packages: List[str] = []
    for section in ("dependencies", "devDependencies"):
        deps = doc.get(section)
        if isinstance(deps, dict):
            packages.extend(deps.keys())
    return _unique(packages)


def scan_uv_lock(directory: str) -> List[str]:
    doc = _load_toml(os.path.join(directory, Constants.UV_LOCK_FILE)) or {}
    entries = doc.get("package") or []
    return _unique([str(e.get("name", "")) for e in entries if isinstance(e, dict)])


def scan_pyproject(directory: str) -> List[str]:
    doc = _load_toml(os.path.join(directory, Constants.PYPROJECT_FILE)) or {}
    project = doc.get("project")
    deps = project.get("dependencies") if isinstance(project, dict) else None
    if not isinstance(deps, list):
        return []
    packages: List[str] = []
    for dep in deps:
        if not isinstance(dep, str):
            continue
        match = _REQUIREMENT_NAME.match(dep.strip())
        if match:
            packages.append(match.group(0))
    return _unique(packages)


def scan_requirements(directory: str) -> List[str]:
    body = _read_text(os.path.join(directory, Constants.REQUIREMENTS_FILE))
    if body is None:
        return []
    try:
        reqs = list(requirements.parse(body))
    except (OSError, ValueError) as e:  # "-r" includes are resolved from the cwd
        logger.debug("Unparseable requirements.txt: %s", e)
        return []
    return _unique([r.name for r in reqs if r.name])


def scan_go_mod(directory: str) -> List[str]:
    body = _read_text(os.path.join(directory, Constants.GO_MOD_FILE))
    if body is None:
        return []
    packages: List[str] = []
    in_require = False
    for raw in body.splitlines():
        line = raw.strip()
        if line.startswith("require ("):
            in_require = True
        elif line == ")":
            in_require = False
        elif line.startswith("require "):
            parts = line[len("require "):].split()
            if parts:
                packages.append(parts[0])
        elif in_require and line and not line.startswith("//"):
            packages.append(line.split()[0])
    return _unique(packages)


# Checked in order; the first manifest with at least one package wins.
SCANNERS: List[Tuple[str, str, Callable[[str], List[str]]]] = [
    (Constants.CARGO_TOML_FILE, "cargo", scan_cargo),
    (Constants.PACKAGE_JSON_FILE, "npm", scan_npm),
    (Constants.UV_LOCK_FILE, "pip", scan_uv_lock),
    (Constants.PYPROJECT_FILE, "pip", scan_pyproject),
    (Constants.REQUIREMENTS_FILE, "pip", scan_requirements),
    (Constants.GO_MOD_FILE, "go", scan_go_mod),
]


def scan_project(directory: str = ".") -> Optional[ProjectInfo]:
    """Detect the project manifest in ``directory``.

    Args:
        directory: Directory to inspect (not recursive).

    Returns:
        ProjectInfo for the first manifest that lists packages, or None.
    """
    for file_name, source, scanner in SCANNERS:
        packages = scanner(directory)
        if packages:
            logger.info("Found %d packages in %s", len(packages), file_name)
            return ProjectInfo(file_name=file_name, source=source, packages=packages)
    return None
