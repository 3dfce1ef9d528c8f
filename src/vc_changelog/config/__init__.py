"""
Configuration loading for vc_changelog.

Provides a simple loader for the optional changelog configuration file
located in the repository root. See :mod:`vc_changelog.config.loader` for
implementation details.
"""

from vc_changelog.exceptions import ConfigError  # noqa: F401

from .loader import DEFAULT_CONFIG, load_config  # noqa: F401
