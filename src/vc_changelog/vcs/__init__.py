"""
Version control system (VCS) integration.

This package contains the Git client used to query tags and commit
subjects, and the policy that turns user-supplied (or missing)
references into a concrete commit range.
"""

from .git_client import GitClient  # noqa: F401
from .tag_resolver import ResolvedRange, TagResolver  # noqa: F401
