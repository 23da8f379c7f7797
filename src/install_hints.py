"""Install command suggestions for packages that are available but not installed."""

from __future__ import annotations

import os
from typing import List, Sequence

from constants import Constants
from versioning.models import VersionInfo


def install_commands(package: str, available: Sequence[VersionInfo], directory: str = ".") -> List[str]:
    """Suggest one install command per source that can install ``package``.

    Project markers in ``directory`` switch to the project-local form
    (``npm install`` in a Node project, ``uv add`` in a uv project, ...).

    Args:
        package: Package name.
        available: Registry answers, in precedence order.
        directory: Directory inspected for project markers.

    Returns:
        list: Commands, in the order of ``available``; sources without a
        known install command are skipped.
    """
    def exists(name: str) -> bool:
        return os.path.exists(os.path.join(directory, name))

    in_node = exists(Constants.PACKAGE_JSON_FILE)
    in_uv = exists(Constants.UV_LOCK_FILE)
    in_cargo = exists(Constants.CARGO_TOML_FILE)
    in_go = exists(Constants.GO_MOD_FILE)

    commands: List[str] = []
    for info in available:
        if info.source == "brew":
            commands.append(f"brew install {package}")
        elif info.source == "npm":
            commands.append(f"npm install {package}" if in_node else f"npm install -g {package}")
        elif info.source == "pip":
            commands.append(f"uv add {package}" if in_uv else f"pip install {package}")
        elif info.source == "cargo":
            commands.append(f"cargo add {package}" if in_cargo else f"cargo install {package}")
        elif info.source == "go":
            commands.append(f"go get {package}" if in_go else f"go install {package}")
    return commands
