"""User configuration: source precedence loaded from YAML or TOML.

Example ``~/.config/latest/config.yml``::

    precedence:
      - path
      - brew
      - npm

A ``config.toml`` holding ``precedence = ["path", "brew", "npm"]`` is read
as well; the format follows the file extension.

Loading never raises; any problem falls back to the registry's declaration
order so a broken config file cannot break the CLI.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from typing import List, Optional

import yaml

from constants import Constants
from sources import default_precedence, is_known_source

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Runtime configuration."""

    precedence: List[str] = field(default_factory=default_precedence)


def candidate_paths(path: Optional[str] = None) -> List[str]:
    """Return config file locations to try, highest priority first."""
    if path:
        return [path]
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        return [env_path]
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return [os.path.join(base, Constants.CONFIG_DIR_NAME, name) for name in Constants.CONFIG_FILE_NAMES]


def parse_precedence(data) -> Optional[List[str]]:
    """Extract the known source names from a loaded config document.

    Returns:
        The precedence list, or None when the document does not define a
        usable one.
    """
    if not isinstance(data, dict):
        return None
    names = data.get("precedence")
    if not isinstance(names, list):
        return None
    precedence: List[str] = []
    for name in names:
        if isinstance(name, str) and is_known_source(name):
            if name not in precedence:
                precedence.append(name)
        else:
            logger.warning("Ignoring unknown source in config: %s", name)
    return precedence or None


def _read_document(path: str):
    if path.endswith(".toml"):
        with open(path, "rb") as f:
            return tomllib.load(f)
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from the first existing config file.

    Args:
        path: Explicit config path (``--config``); overrides the search.

    Returns:
        Config: Parsed configuration, or defaults.
    """
    for candidate in candidate_paths(path):
        if not os.path.isfile(candidate):
            if path:
                logger.warning("Config file not found: %s", candidate)
            continue
        try:
            data = _read_document(candidate)
        except (OSError, UnicodeDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError) as e:
            logger.warning("Failed to load config %s: %s", candidate, e)
            return Config()

        precedence = parse_precedence(data)
        if precedence is None:
            logger.debug("Config %s defines no usable precedence; using defaults", candidate)
            return Config()
        logger.debug("Loaded source precedence from %s: %s", candidate, precedence)
        return Config(precedence=precedence)
    return Config()
