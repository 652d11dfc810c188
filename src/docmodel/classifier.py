# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Classification of comment records into module buckets."""

import logging
from dataclasses import replace

from docmodel.comment import CommentRecord
from docmodel.model import ClassRecord, MixinRecord, ModuleDraft
from docmodel.renderer import Renderer
from docmodel.tags import is_mixin

logger = logging.getLogger(__name__)

MODULE_WRAPPER_MARKER = "(function ()"
DESCRIPTION_NODE_TYPE = "description"
DEPRECATED_TAG = "deprecated"


class Classifier:
    """Route comments into the buckets of a module draft."""

    def __init__(
        self, renderer: Renderer, wrapper_marker: str = MODULE_WRAPPER_MARKER
    ) -> None:
        """Initialize the classifier.

        Args:
            renderer: Renderer applied to the module description.
            wrapper_marker: Code prefix identifying the module description
                comment.
        """
        self._renderer = renderer
        self._wrapper_marker = wrapper_marker

    def classify(self, draft: ModuleDraft, comment: CommentRecord) -> ModuleDraft:
        """Fold one tag-resolved comment into the draft.

        Args:
            draft: Current module draft.
            comment: Comment with ``memberof``/``mixes`` tags already applied.

        Returns:
            The draft with at most one bucket updated. Comments that match no
            bucket leave the draft unchanged.
        """
        context = comment.context
        if context is None:
            return self._classify_module_comment(draft, comment)

        if context.type == "declaration":
            if is_mixin(comment):
                mixin = MixinRecord(declaration=comment)
                return replace(draft, mixins={**draft.mixins, context.name: mixin})
            return replace(draft, variables=draft.variables + (comment,))

        if context.type == "function":
            if comment.is_constructor:
                clazz = ClassRecord(constructor=comment)
                return replace(draft, classes={**draft.classes, context.name: clazz})
            return replace(draft, functions=draft.functions + (comment,))

        if context.type == "method":
            return self._attach_member(draft, comment, field_name="methods")
        if context.type == "property":
            return self._attach_member(draft, comment, field_name="properties")

        logger.debug(
            f"Ignoring comment with unknown context (module={draft.name} "
            f"type={context.type} name={context.name})"
        )
        return draft

    def _attach_member(
        self, draft: ModuleDraft, comment: CommentRecord, field_name: str
    ) -> ModuleDraft:
        owner = comment.context.owner if comment.context else None
        if owner is None:
            return draft
        if owner in draft.classes:
            clazz = draft.classes[owner]
            updated = replace(
                clazz, **{field_name: getattr(clazz, field_name) + (comment,)}
            )
            return replace(draft, classes={**draft.classes, owner: updated})
        if owner in draft.mixins:
            mixin = draft.mixins[owner]
            updated = replace(
                mixin, **{field_name: getattr(mixin, field_name) + (comment,)}
            )
            return replace(draft, mixins={**draft.mixins, owner: updated})

        logger.debug(
            f"Dropping member without registered owner (module={draft.name} "
            f"owner={owner} name={comment.name})"
        )
        return draft

    def _classify_module_comment(
        self, draft: ModuleDraft, comment: CommentRecord
    ) -> ModuleDraft:
        if draft.description is not None or not self._is_module_description(comment):
            return draft

        is_deprecated = draft.is_deprecated
        deprecation_message = draft.deprecation_message
        for tag in comment.tags:
            if tag.type == DEPRECATED_TAG:
                is_deprecated = True
                deprecation_message = tag.string
        return replace(
            draft,
            description=self._renderer.render(comment.description.full),
            is_deprecated=is_deprecated,
            deprecation_message=deprecation_message,
        )

    def _is_module_description(self, comment: CommentRecord) -> bool:
        if comment.code and comment.code.startswith(self._wrapper_marker):
            return True
        return comment.node_type == DESCRIPTION_NODE_TYPE
