"""
Rendering of grouped changelog entries into Markdown.
"""

from .markdown_renderer import ReleaseMetadata, render_changelog  # noqa: F401
