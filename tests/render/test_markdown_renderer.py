import unittest

from vc_changelog.grouping.change_classifier import Category
from vc_changelog.grouping.group_model import TicketGroup
from vc_changelog.render.markdown_renderer import (
    ReleaseMetadata,
    compare_url,
    join_url,
    render_changelog,
    render_ticket_group,
)

METADATA = ReleaseMetadata(from_tag="deploy-1", to_tag="deploy-2", version="1.4.0", release_date="2024-05-01")
REPO = "https://git.example.com/team/app/"
TRACKER = "https://jira.example.com/browse"


class TestUrls(unittest.TestCase):
    def test_join_url_single_slash(self) -> None:
        self.assertEqual(join_url("https://x/", "/a/", "b"), "https://x/a/b")

    def test_compare_url(self) -> None:
        self.assertEqual(
            compare_url(REPO, "deploy-1", "deploy-2"),
            "https://git.example.com/team/app/compare/deploy-1...deploy-2",
        )


class TestRenderTicketGroup(unittest.TestCase):
    def test_single_message_has_no_count(self) -> None:
        group = TicketGroup(ticket_key="XYZ-1", description="null pointer", messages=("fix null pointer",))
        self.assertEqual(
            render_ticket_group(group, TRACKER),
            [
                "- [XYZ-1](https://jira.example.com/browse/XYZ-1) null pointer",
                "  - fix null pointer",
            ],
        )

    def test_count_suffix_for_multiple_messages(self) -> None:
        group = TicketGroup(ticket_key="ABC-2", description="retry", messages=("add retry", "add backoff"))
        lines = render_ticket_group(group, TRACKER)
        self.assertEqual(lines[0], "- [ABC-2](https://jira.example.com/browse/ABC-2) retry [2]")
        self.assertEqual(lines[1:], ["  - add retry", "  - add backoff"])


class TestRenderChangelog(unittest.TestCase):
    def test_full_document(self) -> None:
        grouped = {
            Category.BUG_FIXES: [TicketGroup("XYZ-1", "crash", ("fix crash",))],
            Category.FEATURES: [
                TicketGroup("ABC-1", "export", ("add csv export",)),
                TicketGroup("ABC-2", "retry", ("add retry", "add backoff")),
            ],
        }
        document = render_changelog(METADATA, grouped, REPO, TRACKER, title="Release Notes")
        expected = (
            "# Release Notes\n"
            "\n"
            "## [1.4.0](https://git.example.com/team/app/compare/deploy-1...deploy-2) - 2024-05-01\n"
            "\n"
            "### Features\n"
            "\n"
            "- [ABC-1](https://jira.example.com/browse/ABC-1) export\n"
            "  - add csv export\n"
            "- [ABC-2](https://jira.example.com/browse/ABC-2) retry [2]\n"
            "  - add retry\n"
            "  - add backoff\n"
            "\n"
            "### Bug Fixes\n"
            "\n"
            "- [XYZ-1](https://jira.example.com/browse/XYZ-1) crash\n"
            "  - fix crash\n"
        )
        self.assertEqual(document, expected)

    def test_empty_categories_are_skipped(self) -> None:
        document = render_changelog(METADATA, {Category.OTHER: []}, REPO, TRACKER)
        self.assertNotIn("### Other", document)
        self.assertTrue(document.startswith("# Changelog\n\n## [1.4.0]"))
        self.assertTrue(document.endswith("2024-05-01\n"))

    def test_category_titles(self) -> None:
        grouped = {category: [TicketGroup("ABC-1", "d", ("m",))] for category in Category}
        document = render_changelog(METADATA, grouped, REPO, TRACKER)
        headings = [line for line in document.splitlines() if line.startswith("### ")]
        self.assertEqual(
            headings,
            ["### Features", "### Improvements", "### Bug Fixes", "### CI/CD", "### Refactor", "### Other"],
        )


if __name__ == "__main__":
    unittest.main()
