"""
Grouping logic for commit messages.

This package classifies commit messages into changelog categories and
groups them by ticket. See :mod:`vc_changelog.grouping.change_classifier`
and :mod:`vc_changelog.grouping.group_model` for details.
"""

from .change_classifier import Category, classify_message, classify_records  # noqa: F401
from .group_model import TicketGroup, group_categories  # noqa: F401
