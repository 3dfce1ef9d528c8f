"""
Parsing of raw commit subject lines into structured records.

Each subject line is matched against two patterns in order. The primary
pattern understands the team convention::

    ABC-123: BE / short description / what was changed [tags]

The fallback pattern picks up a ticket key embedded in a branch name,
as found in merge commits (``Merge branch 'x' into feature/ABC-456-fix-it``).
Lines matching neither pattern keep their full text as the message, so
every input line yields exactly one :class:`CommitRecord`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


TICKET_PATTERN = r"[A-Z]{3,5}-\d+"

PRIMARY_PATTERN = re.compile(
    r"^\s*(?P<ticket>" + TICKET_PATTERN + r")[: ]\s*"
    r"(?:(?P<abbrev>[A-Z]{2})?\s*/)?\s*"
    r"(?P<description>[\w /]+)"
    r"/(?P<message>[^\[]+)?"
    r"(?:\[.*\])?\s*$"
)

MERGE_PATTERN = re.compile(
    r"(?<![A-Z])(?P<ticket>" + TICKET_PATTERN + r")-(?P<description>[\w-]+)"
)


@dataclass(frozen=True)
class CommitRecord:
    """Structured view of a single commit subject.

    Attributes
    ----------
    ticket_key : str
        Issue tracker key such as ``ABC-123``, or an empty string.
    abbrev : str
        Two letter area code (``BE``, ``FE``...), or an empty string.
    description : str
        Short description of the ticket.
    message : str
        The change itself. Empty for merge-style subjects.
    """

    ticket_key: str
    abbrev: str
    description: str
    message: str


def match_primary(line: str) -> Optional[re.Match]:
    """Return the primary pattern match for ``line`` or ``None``."""
    return PRIMARY_PATTERN.match(line)


def match_merge(line: str) -> Optional[re.Match]:
    """Return the first merge-style ticket match in ``line`` or ``None``."""
    return MERGE_PATTERN.search(line)


def parse_line(line: str) -> CommitRecord:
    """Convert one commit subject into a :class:`CommitRecord`.

    Never raises for string input; unrecognised lines produce a record
    with empty ticket fields and the trimmed line as message.
    """
    match = match_primary(line)
    if match is not None:
        return CommitRecord(
            ticket_key=match.group("ticket"),
            abbrev=match.group("abbrev") or "",
            description=match.group("description").strip(),
            message=(match.group("message") or "").strip(),
        )

    match = match_merge(line)
    if match is not None:
        return CommitRecord(
            ticket_key=match.group("ticket"),
            abbrev="",
            description=match.group("description").replace("-", " "),
            message="",
        )

    logger.debug("No ticket pattern matched: %r", line)
    return CommitRecord(ticket_key="", abbrev="", description="", message=line.strip())


def parse_log_lines(lines: Iterable[str]) -> List[CommitRecord]:
    """Parse every line, preserving input order."""
    return [parse_line(line) for line in lines]
