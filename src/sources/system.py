"""System package manager sources (Homebrew, APT)."""

from __future__ import annotations

import json
from typing import Optional

from common.subprocess_utils import command_exists, run_for_output
from versioning.models import Ecosystem
from .base import Source, extract_version_field


class BrewSource(Source):
    """Latest stable version known to Homebrew (formula, then cask)."""

    name = "brew"
    ecosystem = Ecosystem.SYSTEM

    def query_version(self, package: str) -> Optional[str]:
        if not command_exists("brew"):
            return None
        out = run_for_output(["brew", "info", package, "--json=v2"])
        return parse_brew_json(out) if out else None


def parse_brew_json(text: str) -> Optional[str]:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    formulae = data.get("formulae") or []
    if formulae and isinstance(formulae[0], dict):
        stable = (formulae[0].get("versions") or {}).get("stable")
        if isinstance(stable, str) and stable:
            return stable

    casks = data.get("casks") or []
    if casks and isinstance(casks[0], dict):
        version = casks[0].get("version")
        if isinstance(version, str) and version:
            return version
    return None


class AptSource(Source):
    """Candidate version from the APT package cache."""

    name = "apt"
    ecosystem = Ecosystem.SYSTEM

    def query_version(self, package: str) -> Optional[str]:
        if not command_exists("apt-cache"):
            return None
        out = run_for_output(["apt-cache", "show", package])
        return extract_version_field(out) if out else None
