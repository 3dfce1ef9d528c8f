"""
Commit subject parsing.

See :mod:`vc_changelog.parsing.log_parser` for the supported subject shapes.
"""

from .log_parser import CommitRecord, parse_line, parse_log_lines  # noqa: F401
