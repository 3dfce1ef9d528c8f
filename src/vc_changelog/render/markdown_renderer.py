"""
Markdown rendering of grouped changelog entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Sequence

from vc_changelog.grouping.change_classifier import Category
from vc_changelog.grouping.group_model import TicketGroup


@dataclass(frozen=True)
class ReleaseMetadata:
    """Release information shown in the version heading."""

    from_tag: str
    to_tag: str
    version: str
    release_date: str


def join_url(base: str, *parts: str) -> str:
    """Join URL segments with exactly one slash between them."""
    segments = [base.rstrip("/")] + [part.strip("/") for part in parts]
    return "/".join(segments)


def compare_url(repo_browser_url: str, from_tag: str, to_tag: str) -> str:
    return join_url(repo_browser_url, "compare", f"{from_tag}...{to_tag}")


def render_ticket_group(group: TicketGroup, issue_tracker_url: str) -> List[str]:
    """Render one ticket bullet followed by its message sub-bullets."""
    link = f"[{group.ticket_key}]({join_url(issue_tracker_url, group.ticket_key)})"
    bullet = f"- {link} {group.description}".rstrip()
    if group.count > 1:
        bullet += f" [{group.count}]"
    lines = [bullet]
    lines.extend(f"  - {message}" for message in group.messages)
    return lines


def render_changelog(
    metadata: ReleaseMetadata,
    grouped: Mapping[Category, Sequence[TicketGroup]],
    repo_browser_url: str,
    issue_tracker_url: str,
    title: str = "Changelog",
) -> str:
    """Render the changelog document.

    Parameters
    ----------
    metadata : ReleaseMetadata
        Tags, version and date of the release.
    grouped : Mapping[Category, Sequence[TicketGroup]]
        Ticket groups per category. Missing or empty categories are skipped.
    repo_browser_url : str
        Base URL of the repository browser, used for the compare link.
    issue_tracker_url : str
        Base URL of the issue tracker, the ticket key is appended to it.
    title : str
        Document title.

    Returns
    -------
    str
        The Markdown document, ending with a single newline.
    """
    link = compare_url(repo_browser_url, metadata.from_tag, metadata.to_tag)
    lines = [
        f"# {title}",
        "",
        f"## [{metadata.version}]({link}) - {metadata.release_date}",
        "",
    ]
    for category in Category:
        groups = grouped.get(category)
        if not groups:
            continue
        lines.append(f"### {category.title}")
        lines.append("")
        for group in groups:
            lines.extend(render_ticket_group(group, issue_tracker_url))
        lines.append("")
    return "\n".join(lines).rstrip("\n") + "\n"
