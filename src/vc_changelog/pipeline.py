"""
End-to-end changelog pipeline.

Runs the four stages in sequence on an in-memory list of commit
subjects: parse, classify, group by ticket, render. The pipeline has no
I/O of its own; fetching subjects and writing the result is left to the
caller (see :mod:`vc_changelog.cli`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from vc_changelog.grouping.change_classifier import Category, MessageGroup, classify_records
from vc_changelog.grouping.group_model import TicketGroup, group_categories
from vc_changelog.parsing.log_parser import CommitRecord, parse_log_lines
from vc_changelog.render.markdown_renderer import ReleaseMetadata, render_changelog


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class ChangelogResult:
    """Output of :func:`build_changelog` with the intermediate stages."""

    records: List[CommitRecord]
    classified: Dict[Category, List[MessageGroup]]
    grouped: Dict[Category, List[TicketGroup]]
    document: str


def build_changelog(
    subjects: Iterable[str],
    metadata: ReleaseMetadata,
    config: Mapping[str, Any],
) -> ChangelogResult:
    """Run the parse, classify, group and render stages.

    ``config`` must provide ``repo_browser_url``, ``issue_tracker_url``
    and ``title`` as returned by :func:`vc_changelog.config.load_config`.
    """
    records = parse_log_lines(subjects)
    logger.debug("Parsed %d commit subjects", len(records))

    classified = classify_records(records)
    for category, message_groups in classified.items():
        logger.debug("%s: %d distinct messages", category.title, len(message_groups))

    grouped = group_categories(classified)
    document = render_changelog(
        metadata,
        grouped,
        repo_browser_url=config["repo_browser_url"],
        issue_tracker_url=config["issue_tracker_url"],
        title=config["title"],
    )
    return ChangelogResult(records=records, classified=classified, grouped=grouped, document=document)
