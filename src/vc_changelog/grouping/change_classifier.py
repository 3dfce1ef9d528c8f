"""
Heuristics for classifying commit messages into changelog categories.

Classification is a pure function of the message text: the message is
lower-cased and tested against an ordered list of regular expressions.
The first rule that matches wins, so the order of :data:`CATEGORY_RULES`
is significant. The final rule matches anything, which makes the
classifier total.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Pattern, Tuple

from vc_changelog.parsing.log_parser import CommitRecord


class Category(Enum):
    """Changelog sections, declared in display order."""

    FEATURES = "Features"
    IMPROVEMENTS = "Improvements"
    BUG_FIXES = "Bug Fixes"
    CI_CD = "CI/CD"
    REFACTOR = "Refactor"
    OTHER = "Other"

    @property
    def title(self) -> str:
        return self.value


# Inflections accepted after a verb: added, adding, fixes, used, logged, setting
TENSE_SUFFIX = r"(?:[a-z]?(?:ed|ing)|e?[ds]|e)?"


def _leading_verb(*verbs: str) -> Pattern[str]:
    return re.compile(r"^\s*(?:" + "|".join(verbs) + r")" + TENSE_SUFFIX + r"\s")


CATEGORY_RULES: Tuple[Tuple[Category, Pattern[str]], ...] = (
    (
        Category.FEATURES,
        _leading_verb(
            "implement", "introduce", "new", "feature", "upgrade", "add", "use", "create",
        ),
    ),
    (
        Category.IMPROVEMENTS,
        _leading_verb(
            "improve", "set", "increase", "adjust", "change", "enable", "disable",
            "update", "replace", "check", "show", "modernize", "optimi[sz]e", "tweak",
            "try", "enhance", "reduce", "revise", "rework", "avoid", "streamline",
            "simplify", "modify",
        ),
    ),
    (
        Category.BUG_FIXES,
        _leading_verb(
            "fix", "bug", "log", "error", "solve", "resolve", "corrected", "patch",
            "revert", "restore", "repair", "handle", "prevent", "crash", "leak",
            "fault", "broken", "hang", "stall", "fail", "issue",
        ),
    ),
    (Category.CI_CD, re.compile(r"ci|build|deploy|k6|tests")),
    (
        Category.REFACTOR,
        _leading_verb(
            "refactor", "remove", "cleanup", "clean", "move", "rename", "restructure",
            "reorganize", "eliminate",
        ),
    ),
    (Category.OTHER, re.compile(r".*", re.DOTALL)),
)


@dataclass(frozen=True)
class MessageGroup:
    """All records sharing one exact message text."""

    message: str
    records: Tuple[CommitRecord, ...]


def classify_message(message: str) -> Category:
    """Return the category for a single commit message.

    Parameters
    ----------
    message : str
        The message part of a commit subject.

    Returns
    -------
    Category
        The first category whose rule matches the lower-cased message.
    """
    text = message.lower()
    for category, pattern in CATEGORY_RULES:
        if pattern.search(text) is not None:
            return category
    # unreachable: the last rule matches any string
    return Category.OTHER


def group_by_message(records: Iterable[CommitRecord]) -> List[MessageGroup]:
    """Partition records by exact message text, in first-seen order."""
    buckets: Dict[str, List[CommitRecord]] = {}
    for record in records:
        if record.message not in buckets:
            buckets[record.message] = []
        buckets[record.message].append(record)
    return [MessageGroup(message, tuple(items)) for message, items in buckets.items()]


def classify_records(records: Iterable[CommitRecord]) -> Dict[Category, List[MessageGroup]]:
    """Assign every distinct message to exactly one category.

    Records are grouped by message text first, so two records with the
    same message always share a category. The returned mapping only
    contains categories that received at least one message group, keyed
    in display order.
    """
    assigned: Dict[Category, List[MessageGroup]] = {}
    for group in group_by_message(records):
        category = classify_message(group.message)
        if category not in assigned:
            assigned[category] = []
        assigned[category].append(group)
    return {category: assigned[category] for category in Category if category in assigned}
