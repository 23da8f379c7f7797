"""Installed-binary source: asks a command on PATH for its version."""

from __future__ import annotations

import logging
from typing import Optional

from constants import Constants
from common.logging_utils import extra_context
from common.subprocess_utils import command_exists, run_command
from versioning.models import Ecosystem
from .base import Source, extract_version

logger = logging.getLogger(__name__)

VERSION_FLAGS = ("--version", "-version", "version", "-V")
UNKNOWN_VERSION = "installed"


class PathSource(Source):
    """Reports the version of an executable found on PATH."""

    name = "path"
    ecosystem = Ecosystem.SYSTEM
    is_local = True

    def __init__(self, timeout: float = Constants.COMMAND_TIMEOUT):
        self._timeout = timeout

    def query_version(self, package: str) -> Optional[str]:
        if not package or not command_exists(package):
            return None

        for flag in VERSION_FLAGS:
            proc = run_command([package, flag], timeout=self._timeout)
            if proc is None:
                continue
            version = extract_version(proc.stdout) or extract_version(proc.stderr)
            if version:
                return version

        logger.debug(
            "Command exists but reported no version",
            extra=extra_context(event="version_probe", component="path", outcome="unknown", package=package),
        )
        return UNKNOWN_VERSION
