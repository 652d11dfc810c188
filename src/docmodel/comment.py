# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Comment record DTOs and the comment parser contract."""

from dataclasses import dataclass
from typing import Literal, Protocol


ContextType = Literal["declaration", "function", "method", "property"]


class CommentParseError(RuntimeError):
    """Represent a failure of the comment-token parser for one module."""


@dataclass(frozen=True)
class Tag:
    """Represent a tag the comment parser did not model natively.

    Attributes:
        key: Tag name without the leading ``@`` (for example ``memberof``).
        value: Raw tag value text.
    """

    key: str
    value: str


@dataclass(frozen=True)
class DocTag:
    """Represent a natively modeled tag such as ``deprecated``."""

    type: str
    string: str = ""


@dataclass(frozen=True)
class Description:
    """Represent the raw description text of a comment.

    Attributes:
        full: Whole description text.
        summary: First paragraph.
        body: Remaining paragraphs.
    """

    full: str = ""
    summary: str = ""
    body: str = ""


@dataclass(frozen=True)
class SyntaxContext:
    """Represent the code construct a comment documents.

    Attributes:
        type: Context type. Values outside ``ContextType`` are tolerated.
        name: Declared name.
        owner: Owning class or mixin name, if known.
        string: Dotted display path, for example ``Foo.prototype.bar()``.
    """

    type: str
    name: str
    owner: str | None = None
    string: str | None = None


@dataclass(frozen=True)
class CommentRecord:
    """Represent one documented entity produced by a comment parser.

    Attributes:
        context: Syntactic context; ``None`` for context-less comments.
        tags: Natively modeled tags.
        unsupported: Tags the parser did not model, in source order.
        is_private: Privacy flag; ``None`` when never determined.
        is_constructor: Whether the comment documents a constructor.
        description: Raw description text.
        code: Raw code snippet following the comment.
        node_type: Parser node type (for example ``description``).
        line: Source line of the comment (1-based), when known.
        mixes_into: Mixin target recovered from a ``mixes`` tag.
    """

    context: SyntaxContext | None = None
    tags: tuple[DocTag, ...] = ()
    unsupported: tuple[Tag, ...] = ()
    is_private: bool | None = None
    is_constructor: bool = False
    description: Description = Description()
    code: str = ""
    node_type: str | None = None
    line: int | None = None
    mixes_into: str | None = None

    @property
    def name(self) -> str:
        """Return the declared name, or an empty string without context."""
        return self.context.name if self.context else ""


class CommentParser(Protocol):
    """Turn raw module text into an ordered sequence of comment records."""

    def parse_comments(self, source: str) -> list[CommentRecord]:
        """Parse comments from module text.

        Args:
            source: Raw module text.

        Returns:
            Comment records in source order.

        Raises:
            CommentParseError: If the text cannot be parsed.
        """
