# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Description text renderers."""

import logging
from typing import Protocol

from markdown_it import MarkdownIt

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Render raw description text for output."""

    def render(self, text: str) -> str:
        """Render description text.

        Args:
            text: Raw description text.

        Returns:
            Rendered text.
        """


class MarkdownRenderer:
    """Render GitHub-flavored markdown to HTML with raw HTML escaped."""

    def __init__(self) -> None:
        self._markdown = MarkdownIt(
            "commonmark", {"html": False, "typographer": False}
        ).enable(["table", "strikethrough"])

    def render(self, text: str) -> str:
        """Render markdown description text to HTML.

        Args:
            text: Raw markdown text.

        Returns:
            HTML fragment. Raw HTML in ``text`` is escaped, not passed through.
        """
        return self._markdown.render(text)
