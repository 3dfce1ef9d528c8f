"""
Git client implementation for vc_changelog.

This module wraps the read-only Git queries required to build a
changelog: reference checks, tag listing, commit counting, commit
subjects and tag dates. All subprocess calls go through
:meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from vc_changelog.exceptions import GitError


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class GitClient:
    """Client for querying a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_git_available() -> bool:
        """Return True if the ``git`` executable is on the PATH."""
        return shutil.which("git") is not None

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.error("Unable to execute git: %s", e)
            raise GitError(f"Unable to execute git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # References and tags
    # ------------------------------------------------------------------
    def ref_exists(self, ref: str) -> bool:
        """Return True if ``ref`` resolves to a commit."""
        result = self._run(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], check=False)
        return result.returncode == 0

    def is_tag(self, ref: str) -> bool:
        """Return True if ``ref`` names a tag."""
        result = self._run(["show-ref", "--verify", "--quiet", f"refs/tags/{ref}"], check=False)
        return result.returncode == 0

    def list_tags(self, prefix: str = "", merged_into: Optional[str] = None) -> List[str]:
        """List tags starting with ``prefix``, newest first.

        Parameters
        ----------
        prefix : str
            Only tags whose name starts with this prefix are returned.
        merged_into : str, optional
            Restrict the result to tags reachable from this reference.

        Returns
        -------
        List[str]
            Tag names sorted by creation date, most recent first.
        """
        args = ["tag", "--list", f"{prefix}*", "--sort=-creatordate"]
        if merged_into:
            args.extend(["--merged", merged_into])
        result = self._run(args, check=True)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def get_tag_date(self, tag: str) -> Optional[str]:
        """Return the tag date as ``YYYY-MM-DD``.

        Annotated tags report their tagger date; lightweight tags fall back
        to the date of the tagged commit. ``None`` is returned when Git
        reports nothing.
        """
        for field in ("taggerdate", "creatordate"):
            result = self._run(
                ["for-each-ref", f"--format=%({field}:short)", f"refs/tags/{tag}"],
                check=True,
            )
            value = result.stdout.strip()
            if value:
                return value
        return None

    # ------------------------------------------------------------------
    # Commit ranges
    # ------------------------------------------------------------------
    def count_commits(self, from_ref: str, to_ref: str) -> int:
        """Count the commits reachable from ``to_ref`` but not ``from_ref``."""
        result = self._run(["rev-list", "--count", f"{from_ref}..{to_ref}"], check=True)
        try:
            return int(result.stdout.strip() or 0)
        except ValueError as e:
            raise GitError(f"Unexpected rev-list output: {result.stdout!r}") from e

    def get_log_subjects(self, from_ref: str, to_ref: str) -> List[str]:
        """Return the commit subjects of ``from_ref..to_ref``, oldest first."""
        result = self._run(
            ["log", "--reverse", "--format=%s", f"{from_ref}..{to_ref}"],
            check=True,
        )
        return [line for line in result.stdout.splitlines() if line.strip()]
