"""
Exception types raised by vc_changelog.

All errors derive from :class:`ChangelogError` so that the CLI can map
them to exit codes in one place. Parsing never raises; lines that do not
match a known commit shape degrade to a fallback record instead.
"""

from __future__ import annotations


class ChangelogError(Exception):
    """Base class for all vc_changelog errors."""

    pass


class GitEnvironmentError(ChangelogError):
    """Raised when the ``git`` executable or a repository is not available."""

    pass


class GitError(ChangelogError):
    """Raised when a Git command fails."""

    pass


class ConfigError(ChangelogError):
    """Raised when the changelog configuration file is invalid."""

    pass


class ReferenceNotFoundError(ChangelogError):
    """Raised when a tag or reference cannot be found in the repository."""

    def __init__(self, ref: str, message: str = "") -> None:
        self.ref = ref
        super().__init__(message or f"Reference '{ref}' does not exist")


class NoCommitsError(ChangelogError):
    """Raised when the resolved range contains no commits.

    This is not a failure: the CLI reports it and exits successfully
    without writing any output.
    """

    def __init__(self, from_ref: str, to_ref: str) -> None:
        self.from_ref = from_ref
        self.to_ref = to_ref
        super().__init__(f"No commits between '{from_ref}' and '{to_ref}'")
