# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Adapters for the ``dox`` JavaScript comment parser output format."""

import json
import logging
import shlex
import subprocess
from typing import Any

from docmodel.comment import (
    CommentParseError,
    CommentRecord,
    Description,
    DocTag,
    SyntaxContext,
    Tag,
)

logger = logging.getLogger(__name__)

DEFAULT_DOX_COMMAND = "dox --raw"

# Tags newer dox releases report in ``tags`` but the model treats as unsupported.
UNSUPPORTED_TAG_TYPES = frozenset({"memberof", "mixes", "mixin"})


class DoxJsonParser:
    """Convert ``dox --raw`` JSON text into comment records."""

    def parse_comments(self, source: str) -> list[CommentRecord]:
        """Parse a JSON array of dox comment nodes.

        Args:
            source: JSON text as printed by ``dox --raw``.

        Returns:
            Comment records in source order. Entries that are not JSON
            objects are skipped.

        Raises:
            CommentParseError: If the text is not a JSON array.
        """
        try:
            nodes = json.loads(source)
        except json.JSONDecodeError as exc:
            raise CommentParseError(f"Invalid dox JSON: {exc}") from exc
        if not isinstance(nodes, list):
            raise CommentParseError("dox output must be a JSON array")

        comments: list[CommentRecord] = []
        for index, node in enumerate(nodes):
            if not isinstance(node, dict):
                logger.warning(f"Skipping non-object dox node (index={index})")
                continue
            comments.append(_to_comment(node))
        return comments


class DoxCommandParser:
    """Pipe module text through the dox command line tool."""

    def __init__(
        self, command: str = DEFAULT_DOX_COMMAND, timeout_seconds: float = 30.0
    ) -> None:
        """Initialize the command parser.

        Args:
            command: Shell-style command line reading source on stdin and
                printing dox JSON on stdout.
            timeout_seconds: Maximum runtime of one command invocation.

        Raises:
            ValueError: If ``command`` is empty.
        """
        self._argv = shlex.split(command)
        if not self._argv:
            raise ValueError("dox command must not be empty")
        self._timeout_seconds = timeout_seconds
        self._json_parser = DoxJsonParser()

    def parse_comments(self, source: str) -> list[CommentRecord]:
        """Run dox on module text and convert its output.

        Args:
            source: Raw JavaScript module text.

        Returns:
            Comment records in source order.

        Raises:
            CommentParseError: If the command cannot run, fails, or prints
                invalid JSON.
        """
        try:
            completed = subprocess.run(  # noqa: S603
                self._argv,
                input=source.encode("utf-8"),
                capture_output=True,
                timeout=self._timeout_seconds,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise CommentParseError(f"Failed to run dox: {exc}") from exc
        if completed.returncode != 0:
            message = completed.stderr.decode("utf-8", errors="replace").strip()
            raise CommentParseError(
                f"dox exited with status {completed.returncode}: {message}"
            )
        try:
            output = completed.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CommentParseError(f"dox printed invalid UTF-8: {exc}") from exc
        return self._json_parser.parse_comments(output)


def _to_comment(node: dict[str, Any]) -> CommentRecord:
    tags: list[DocTag] = []
    unsupported = [
        Tag(key=str(item.get("key", "")), value=str(item.get("value", "")))
        for item in _as_list(node.get("unsupported"))
        if isinstance(item, dict)
    ]
    for item in _as_list(node.get("tags")):
        if not isinstance(item, dict):
            continue
        tag_type = str(item.get("type", ""))
        tag_string = _tag_string(item)
        if tag_type in UNSUPPORTED_TAG_TYPES:
            unsupported.append(Tag(key=tag_type, value=tag_string))
        else:
            tags.append(DocTag(type=tag_type, string=tag_string))

    is_private = node.get("isPrivate")
    line = node.get("line")
    return CommentRecord(
        context=_to_context(node.get("ctx")),
        tags=tuple(tags),
        unsupported=tuple(unsupported),
        is_private=is_private if isinstance(is_private, bool) else None,
        is_constructor=node.get("isConstructor") is True,
        description=_to_description(node.get("description")),
        code=str(node.get("code") or ""),
        node_type=node.get("type") if isinstance(node.get("type"), str) else None,
        line=line if isinstance(line, int) else None,
    )


def _to_context(ctx: object) -> SyntaxContext | None:
    if not isinstance(ctx, dict):
        return None
    scope = ctx.get("scope")
    owner = scope.get("owner") if isinstance(scope, dict) else None
    if owner is None:
        # Newer dox releases report the owner of prototype members here.
        owner = ctx.get("constructor") or ctx.get("cons") or None
    string = ctx.get("string")
    return SyntaxContext(
        type=str(ctx.get("type", "")),
        name=str(ctx.get("name", "")),
        owner=str(owner) if owner is not None else None,
        string=str(string) if string is not None else None,
    )


def _to_description(description: object) -> Description:
    if isinstance(description, str):
        return Description(full=description, summary=description)
    if not isinstance(description, dict):
        return Description()
    return Description(
        full=str(description.get("full") or ""),
        summary=str(description.get("summary") or ""),
        body=str(description.get("body") or ""),
    )


def _tag_string(item: dict[str, Any]) -> str:
    value = item.get("string")
    if value is None:
        value = item.get("value", "")
    return str(value).strip()


def _as_list(value: object) -> list[Any]:
    return value if isinstance(value, list) else []
