"""Helpers for running external commands with a hard timeout."""
from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Optional, Sequence

from constants import Constants
from common.logging_utils import extra_context

logger = logging.getLogger(__name__)


def command_exists(command: str) -> bool:
    """Cheap liveness probe: is ``command`` resolvable on PATH?"""
    return shutil.which(command) is not None


def run_command(
    args: Sequence[str],
    timeout: float = Constants.COMMAND_TIMEOUT,
) -> Optional[subprocess.CompletedProcess]:
    """Run ``args`` and capture its output, bounded by ``timeout`` seconds.

    On expiry the child is killed and reaped before returning. stdin is
    closed so tools that prompt cannot block the lookup.

    Returns:
        The completed process (any exit status), or None when the command
        could not be started or timed out.
    """
    try:
        return subprocess.run(
            list(args),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.debug(
            "Command timed out after %ss: %s",
            timeout,
            args[0] if args else "",
            extra=extra_context(event="subprocess", outcome="timeout", command=args[0] if args else None),
        )
        return None
    except (OSError, ValueError, subprocess.SubprocessError) as exc:
        logger.debug(
            "Command failed to start: %s (%s)",
            args[0] if args else "",
            exc,
            extra=extra_context(event="subprocess", outcome="spawn_error"),
        )
        return None


def run_for_output(
    args: Sequence[str],
    timeout: float = Constants.REGISTRY_COMMAND_TIMEOUT,
) -> Optional[str]:
    """Return stdout of a successful (exit 0) command, else None."""
    proc = run_command(args, timeout=timeout)
    if proc is None or proc.returncode != 0:
        return None
    return proc.stdout
