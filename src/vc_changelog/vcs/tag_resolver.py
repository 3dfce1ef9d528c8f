"""
Resolution of the commit range a changelog is built for.

The resolver turns the references given on the command line (or their
absence) into a concrete ``from..to`` range plus the version and date
shown in the changelog heading. Which tags are considered is driven by
configuration:

- ``tag_prefix`` selects the tags that mark previous releases
  (``deploy-*`` by default).
- ``version_tag_prefix`` selects the tags carrying a version number
  (``v1.2.3``), used when a release changelog is requested.

Version numbers are read from tag names of the form
``{prefix}{major}.{minor}[.{patch}]``.
"""

from __future__ import annotations

import datetime
import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from vc_changelog.exceptions import NoCommitsError, ReferenceNotFoundError
from vc_changelog.render.markdown_renderer import ReleaseMetadata
from vc_changelog.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


VERSION_PATTERN = re.compile(r"(?P<version>\d+\.\d+(?:\.\d+)?)$")


def parse_version_from_tag(tag: str, prefix: str = "v") -> Optional[str]:
    """Extract the version number from a tag name.

    Examples
    --------
    >>> parse_version_from_tag("v1.2.3")
    '1.2.3'
    >>> parse_version_from_tag("release-0.4", prefix="release-")
    '0.4'
    >>> parse_version_from_tag("latest") is None
    True
    """
    if not tag.startswith(prefix):
        return None
    match = VERSION_PATTERN.match(tag[len(prefix):])
    if match is None:
        return None
    return match.group("version")


@dataclass(frozen=True)
class ResolvedRange:
    """A commit range ready to be fed into the changelog pipeline."""

    from_ref: str
    to_ref: str
    commit_count: int
    metadata: ReleaseMetadata


class TagResolver:
    """Resolve the references that delimit a changelog."""

    def __init__(
        self,
        client: GitClient,
        config: Mapping[str, Any],
        today: Optional[datetime.date] = None,
    ) -> None:
        self.client = client
        self.tag_prefix: str = config["tag_prefix"]
        self.version_tag_prefix: str = config["version_tag_prefix"]
        self.unreleased_label: str = config["unreleased_label"]
        self.today = today

    def _require(self, ref: str) -> str:
        if not self.client.ref_exists(ref):
            logger.error("Reference not found: %s", ref)
            raise ReferenceNotFoundError(ref)
        return ref

    def find_previous_tag(self, current: str) -> str:
        """Return the newest ``tag_prefix`` tag merged into ``current``.

        ``current`` itself is skipped so that running on a freshly created
        tag compares it against the tag before it.

        Raises
        ------
        ReferenceNotFoundError
            If no matching tag exists.
        """
        for tag in self.client.list_tags(self.tag_prefix, merged_into=current):
            if tag != current:
                return tag
        raise ReferenceNotFoundError(
            f"{self.tag_prefix}*",
            f"No tag matching '{self.tag_prefix}*' found before '{current}'",
        )

    def find_version(self, current: str) -> str:
        """Return the version of the newest version tag merged into ``current``.

        Falls back to the name of ``current`` when no version tag exists.
        """
        for tag in self.client.list_tags(self.version_tag_prefix, merged_into=current):
            version = parse_version_from_tag(tag, self.version_tag_prefix)
            if version:
                return version
        logger.warning("No version tag found for %s, using the reference name", current)
        return current

    def release_date(self, current: str) -> str:
        if self.client.is_tag(current):
            date = self.client.get_tag_date(current)
            if date:
                return date
        today = self.today or datetime.date.today()
        return today.isoformat()

    def resolve(
        self,
        current: Optional[str] = None,
        previous: Optional[str] = None,
        release: bool = False,
    ) -> ResolvedRange:
        """Resolve the changelog range.

        Parameters
        ----------
        current : str, optional
            Newest reference of the range, ``HEAD`` when omitted.
        previous : str, optional
            Oldest (excluded) reference, the previous release tag when omitted.
        release : bool
            Use the version tag for the heading instead of the unreleased label.

        Raises
        ------
        ReferenceNotFoundError
            If a reference does not exist or no previous tag can be found.
        NoCommitsError
            If the range contains no commits.
        """
        to_ref = self._require(current or "HEAD")
        if previous:
            from_ref = self._require(previous)
        else:
            from_ref = self._require(self.find_previous_tag(to_ref))
        logger.debug("Resolved range %s..%s", from_ref, to_ref)

        count = self.client.count_commits(from_ref, to_ref)
        if count == 0:
            raise NoCommitsError(from_ref, to_ref)

        version = self.find_version(to_ref) if release else self.unreleased_label
        metadata = ReleaseMetadata(
            from_tag=from_ref,
            to_tag=to_ref,
            version=version,
            release_date=self.release_date(to_ref),
        )
        return ResolvedRange(from_ref=from_ref, to_ref=to_ref, commit_count=count, metadata=metadata)
