"""Token parsing utilities for package arguments."""

from typing import Optional, Tuple

from sources import is_known_source


def split_first_colon(s: str) -> Tuple[str, Optional[str]]:
    """Return (prefix, rest) split at the first colon, or (s, None)."""
    if ':' not in s:
        return s, None
    prefix, rest = s.split(':', 1)
    return prefix, rest


def parse_package_arg(arg: str) -> Tuple[Optional[str], str]:
    """Split an optional ``source:`` prefix off a package argument.

    The prefix only counts when it names a registered source, so Maven
    coordinates ("org.slf4j:slf4j-api") and scoped names pass through intact
    while "maven:org.slf4j:slf4j-api" pins the maven source.

    Returns:
        Tuple of (source name or None, package name).
    """
    prefix, rest = split_first_colon(arg)
    if rest is not None and is_known_source(prefix):
        return prefix, rest
    return None, arg
