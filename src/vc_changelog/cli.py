"""
Command line interface for the vc_changelog tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``vcchangelog`` command. It orchestrates
repository detection, configuration loading, reference resolution,
commit subject retrieval, the changelog pipeline and writing the result.
Exit codes are listed below; an empty commit range is reported but is
not an error.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from vc_changelog import __version__
from vc_changelog.config.loader import load_config
from vc_changelog.exceptions import (
    ConfigError,
    GitEnvironmentError,
    GitError,
    NoCommitsError,
    ReferenceNotFoundError,
)
from vc_changelog.pipeline import ChangelogResult, build_changelog
from vc_changelog.vcs.git_client import GitClient
from vc_changelog.vcs.tag_resolver import TagResolver

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_REF_NOT_FOUND = 4
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Simple progress indicator for user feedback."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = None

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            elapsed = time.time() - self.start_time
            click.echo(f"  ✓ Done ({elapsed:.1f}s)")
        return False


def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=False)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=False)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=False)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def detect_repository(start_dir: Path) -> Path:
    """Check that Git is installed and return the repository root.

    Raises
    ------
    GitEnvironmentError
        If ``git`` is not on the PATH or ``start_dir`` is not inside a
        Git repository.
    """
    if not GitClient.is_git_available():
        raise GitEnvironmentError("The 'git' executable was not found on PATH.")
    repo_root = GitClient.find_repo_root(start_dir)
    if repo_root is None:
        raise GitEnvironmentError(f"No Git repository found at or above {start_dir}.")
    return repo_root


def summarize(result: ChangelogResult) -> List[str]:
    """Return one summary line per rendered category."""
    lines = []
    for category, groups in result.grouped.items():
        entries = sum(group.count for group in groups)
        lines.append(f"{category.title}: {len(groups)} ticket(s), {entries} entr{'ies' if entries != 1 else 'y'}")
    return lines


def write_changelog(path: Path, document: str) -> None:
    """Write the rendered document to ``path`` as UTF-8."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document, encoding="utf-8")
    logger.debug("Wrote %d characters to %s", len(document), path)


@click.command()
@click.option("--current", "current", metavar="REF", help="Newest reference of the range (default: HEAD).")
@click.option("--previous", "previous", metavar="REF", help="Previous release reference (default: latest release tag).")
@click.option("--release", is_flag=True, help="Use the version tag in the heading instead of the unreleased label.")
@click.option("-o", "--output", "output", type=click.Path(dir_okay=False), help="Destination file (default from config).")
@click.option("--dry-run", is_flag=True, help="Print the changelog instead of writing it.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="vcchangelog")
def main(
    current: Optional[str],
    previous: Optional[str],
    release: bool,
    output: Optional[str],
    dry_run: bool,
    verbose: bool,
) -> None:
    """Generate a categorized changelog from the commits between two tags.

    Commit subjects are grouped by issue tracker ticket and sorted into
    Features, Improvements, Bug Fixes, CI/CD, Refactor and Other.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    try:
        try:
            repo_root = detect_repository(Path.cwd())
        except GitEnvironmentError as exc:
            print_error(str(exc))
            raise click.exceptions.Exit(EXIT_NO_REPO)
        logger.debug("Repository root: %s", repo_root)

        try:
            config: Dict[str, Any] = load_config(repo_root)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        client = GitClient(repo_root)
        resolver = TagResolver(client, config)

        try:
            with ProgressIndicator("Resolving commit range"):
                resolved = resolver.resolve(current=current, previous=previous, release=release)
        except NoCommitsError as exc:
            print_info(f"{exc}; nothing to write.")
            raise click.exceptions.Exit(EXIT_SUCCESS)
        except ReferenceNotFoundError as exc:
            print_error(str(exc))
            raise click.exceptions.Exit(EXIT_REF_NOT_FOUND)
        except GitError as exc:
            print_error(f"Git error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        print_success(
            f"Range {resolved.from_ref}..{resolved.to_ref}: "
            f"{resolved.commit_count} commit{'s' if resolved.commit_count != 1 else ''}"
        )

        try:
            with ProgressIndicator("Reading commit subjects"):
                subjects = client.get_log_subjects(resolved.from_ref, resolved.to_ref)
        except GitError as exc:
            print_error(f"Git error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        result = build_changelog(subjects, resolved.metadata, config)
        for line in summarize(result):
            print_info(line, indent=1)

        if dry_run:
            click.echo("")
            click.echo(result.document, nl=False)
            raise click.exceptions.Exit(EXIT_SUCCESS)

        destination = Path(output) if output else repo_root / config["output"]
        write_changelog(destination, result.document)
        print_success(f"Changelog written to {destination}")

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
