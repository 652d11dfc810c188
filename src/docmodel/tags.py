# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Recovery of ownership and mixin relations from unsupported tags."""

from dataclasses import replace

from docmodel.comment import CommentRecord

MEMBEROF_TAG = "memberof"
MIXES_TAG = "mixes"
MIXIN_TAG = "mixin"


def resolve_tags(comment: CommentRecord) -> CommentRecord:
    """Apply ``memberof`` and ``mixes`` tags to a comment.

    A ``memberof`` tag replaces the owner inferred by the parser. A ``mixes``
    tag records the mixin target on ``mixes_into``. Other tags are ignored,
    and so are comments without a syntactic context.

    Args:
        comment: Comment as produced by the parser and comment processors.

    Returns:
        The comment with the recovered relations applied.
    """
    if comment.context is None:
        return comment

    context = comment.context
    mixes_into = comment.mixes_into
    for tag in comment.unsupported:
        if tag.key == MEMBEROF_TAG:
            context = replace(context, owner=tag.value)
        elif tag.key == MIXES_TAG:
            mixes_into = tag.value

    if context is comment.context and mixes_into == comment.mixes_into:
        return comment
    return replace(comment, context=context, mixes_into=mixes_into)


def is_mixin(comment: CommentRecord) -> bool:
    """Return whether any unsupported tag marks the comment as a mixin."""
    return any(tag.key == MIXIN_TAG for tag in comment.unsupported)
