"""
Data models for ticket grouping.

A :class:`TicketGroup` collects the distinct messages recorded against
one ticket within a category. Only records carrying both a ticket key
and a message are eligible; the rest still count towards their category
during classification but never reach the rendered changelog.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

from vc_changelog.grouping.change_classifier import Category, MessageGroup
from vc_changelog.parsing.log_parser import CommitRecord


@dataclass(frozen=True)
class TicketGroup:
    """Representation of one ticket bullet in the changelog.

    Attributes
    ----------
    ticket_key : str
        The issue tracker key shared by all records in the group.
    description : str
        Description taken from the first record of the group.
    messages : Tuple[str, ...]
        Distinct messages in first-seen order.
    records : Tuple[CommitRecord, ...]
        All eligible records of the ticket, in input order.
    """

    ticket_key: str
    description: str
    messages: Tuple[str, ...]
    records: Tuple[CommitRecord, ...] = ()

    @property
    def count(self) -> int:
        """Number of distinct messages."""
        return len(self.messages)


def is_renderable(record: CommitRecord) -> bool:
    """Return True if the record has both a ticket key and a message."""
    return bool(record.ticket_key.strip()) and bool(record.message.strip())


def group_by_ticket(message_groups: Sequence[MessageGroup]) -> List[TicketGroup]:
    """Group the eligible records of one category by ticket key.

    Groups are ordered by ticket key (plain string ordering). Messages
    within a group keep the order in which they were first seen.
    """
    by_ticket: Dict[str, List[CommitRecord]] = {}
    for message_group in message_groups:
        for record in message_group.records:
            if not is_renderable(record):
                continue
            if record.ticket_key not in by_ticket:
                by_ticket[record.ticket_key] = []
            by_ticket[record.ticket_key].append(record)

    groups: List[TicketGroup] = []
    for ticket_key in sorted(by_ticket):
        records = by_ticket[ticket_key]
        messages: List[str] = []
        for record in records:
            if record.message not in messages:
                messages.append(record.message)
        groups.append(
            TicketGroup(
                ticket_key=ticket_key,
                description=records[0].description,
                messages=tuple(messages),
                records=tuple(records),
            )
        )
    return groups


def group_categories(
    classified: Mapping[Category, Sequence[MessageGroup]],
) -> Dict[Category, List[TicketGroup]]:
    """Build ticket groups for every category, dropping empty categories."""
    grouped: Dict[Category, List[TicketGroup]] = {}
    for category in Category:
        ticket_groups = group_by_ticket(classified.get(category, ()))
        if ticket_groups:
            grouped[category] = ticket_groups
    return grouped
