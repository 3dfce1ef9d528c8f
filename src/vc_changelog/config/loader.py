"""
Configuration loader for vc_changelog.

The tool reads an optional JSON configuration file named
``.changelog_config.json`` located in the repository root. Values found
in the file override :data:`DEFAULT_CONFIG`; a missing file simply yields
the defaults.

If the configuration file is malformed, contains unknown keys, or has
fields of the wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from vc_changelog.exceptions import ConfigError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILE_NAME = ".changelog_config.json"

DEFAULT_CONFIG: Dict[str, str] = {
    "title": "Changelog",
    "repo_browser_url": "https://github.com/example/project",
    "issue_tracker_url": "https://jira.example.com/browse",
    "tag_prefix": "deploy-",
    "version_tag_prefix": "v",
    "unreleased_label": "Unreleased",
    "output": "CHANGELOG.md",
}


def get_config_path(repo_root: Path) -> Path:
    """Return the location of the configuration file for ``repo_root``."""
    return repo_root / CONFIG_FILE_NAME


def load_config(repo_root: Path) -> Dict[str, Any]:
    """Load the changelog configuration for a repository.

    Args:
        repo_root: Root directory of the Git repository.

    Returns:
        A dictionary with every key of :data:`DEFAULT_CONFIG`, where values
        from ``.changelog_config.json`` take precedence over the defaults.

    Raises:
        ConfigError: If the configuration file is malformed or invalid.
    """
    config: Dict[str, Any] = dict(DEFAULT_CONFIG)
    config_path = get_config_path(repo_root)

    if not config_path.exists():
        logger.debug("No configuration file at %s, using defaults", config_path)
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    unknown = sorted(key for key in data if key not in DEFAULT_CONFIG)
    if unknown:
        logger.error("Configuration file has unknown keys: %s", unknown)
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    for key, value in data.items():
        if not isinstance(value, str):
            raise ConfigError(f"'{key}' must be a string")
        if not value.strip() and key not in ("tag_prefix", "version_tag_prefix"):
            raise ConfigError(f"'{key}' must not be empty")

    config.update(data)
    logger.debug("Loaded changelog configuration from: %s", config_path)
    logger.debug("Configuration data: %s", config)
    return config
