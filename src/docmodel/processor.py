# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Module processor contracts and loading."""

import importlib
import logging
from collections.abc import Callable
from dataclasses import dataclass

from docmodel.comment import CommentRecord
from docmodel.model import ModuleDraft

logger = logging.getLogger(__name__)

ModuleHook = Callable[[ModuleDraft], ModuleDraft]
CommentHook = Callable[[CommentRecord], CommentRecord]


@dataclass(frozen=True)
class ModuleProcessor:
    """Bundle the optional hooks a processor contributes for one module.

    Attributes:
        process_module: Rewrites the draft once, before classification.
        process_comment: Rewrites each comment before tag resolution.
    """

    process_module: ModuleHook | None = None
    process_comment: CommentHook | None = None


ProcessorFactory = Callable[[str], ModuleProcessor]


def apply_module_hooks(
    processors: list[ModuleProcessor], draft: ModuleDraft
) -> ModuleDraft:
    """Thread the draft through every module hook in registration order."""
    for processor in processors:
        if processor.process_module is not None:
            draft = processor.process_module(draft)
    return draft


def apply_comment_hooks(
    processors: list[ModuleProcessor], comment: CommentRecord
) -> CommentRecord:
    """Thread the comment through every comment hook in registration order."""
    for processor in processors:
        if processor.process_comment is not None:
            comment = processor.process_comment(comment)
    return comment


def load_processor_factory(reference: str) -> ProcessorFactory:
    """Resolve a processor factory reference.

    Args:
        reference: A built-in processor name or a ``package.module:attribute``
            import reference.

    Returns:
        The referenced processor factory.

    Raises:
        ValueError: If the reference is malformed, cannot be imported, or does
            not point to a callable.
    """
    from docmodel.processors import BUILTIN_PROCESSORS

    if reference in BUILTIN_PROCESSORS:
        return BUILTIN_PROCESSORS[reference]

    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(
            f"Processor reference must be a built-in name or 'module:attribute': {reference}"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"Cannot import processor module: {module_name}") from exc
    factory = getattr(module, attribute, None)
    if not callable(factory):
        raise ValueError(f"Processor factory is not callable: {reference}")
    logger.debug(f"Loaded processor factory (reference={reference})")
    return factory
