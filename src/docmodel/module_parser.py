# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Assembly of module documentation records from comment streams."""

import concurrent.futures
import logging
from collections.abc import Iterable
from pathlib import Path

from docmodel.classifier import MODULE_WRAPPER_MARKER, Classifier
from docmodel.comment import CommentParseError, CommentParser, CommentRecord
from docmodel.model import (
    ClassRecord,
    MixinRecord,
    ModuleDraft,
    ModuleError,
    ModuleFile,
    ModuleReadError,
    ModuleRecord,
)
from docmodel.processor import (
    ModuleProcessor,
    ProcessorFactory,
    apply_comment_hooks,
    apply_module_hooks,
)
from docmodel.renderer import MarkdownRenderer, Renderer
from docmodel.tags import resolve_tags

logger = logging.getLogger(__name__)


class ModuleParser:
    """Parse module files into documentation records."""

    def __init__(
        self,
        comment_parser: CommentParser,
        processors: list[ProcessorFactory] | None = None,
        renderer: Renderer | None = None,
        max_workers: int = 10,
        wrapper_marker: str = MODULE_WRAPPER_MARKER,
    ) -> None:
        """Initialize the module parser.

        Args:
            comment_parser: Parser turning module text into comment records.
            processors: Processor factories, in registration order. Each one
                is called with the module text once per module.
            renderer: Renderer for the module description. Defaults to
                ``MarkdownRenderer``.
            max_workers: Maximum number of modules parsed concurrently by
                ``parse_all``.
            wrapper_marker: Code prefix identifying the module description.

        Raises:
            ValueError: If ``max_workers`` is not greater than zero.
        """
        if max_workers <= 0:
            raise ValueError("max_workers must be > 0")
        self._comment_parser = comment_parser
        self._processor_factories = list(processors or [])
        self._classifier = Classifier(
            renderer=renderer or MarkdownRenderer(), wrapper_marker=wrapper_marker
        )
        self._max_workers = max_workers

    def parse(self, file: ModuleFile) -> ModuleRecord:
        """Read, parse and assemble one module.

        Args:
            file: Module identity.

        Returns:
            The finished module record. A module whose comments cannot be
            parsed still yields a record without members.

        Raises:
            ModuleReadError: If the module text cannot be read.
        """
        try:
            source = Path(file.full_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ModuleReadError(
                f"Cannot read module {file.full_path}: {exc}"
            ) from exc

        processors = [factory(source) for factory in self._processor_factories]
        try:
            comments = self._comment_parser.parse_comments(source)
        except CommentParseError as exc:
            logger.warning(
                f"Comment parsing failed; documenting module without comments "
                f"(file_path={file.full_path} error={exc})"
            )
            comments = []
        return self.assemble(file=file, comments=comments, processors=processors)

    def assemble(
        self,
        file: ModuleFile,
        comments: Iterable[CommentRecord],
        processors: list[ModuleProcessor] | None = None,
    ) -> ModuleRecord:
        """Assemble a module record from an already parsed comment stream.

        Args:
            file: Module identity.
            comments: Comment records in source order.
            processors: Processors built for this module.

        Returns:
            The finished module record.
        """
        processors = processors or []
        draft = ModuleDraft(name=file.name, path=file.doc_path)
        draft = apply_module_hooks(processors, draft)
        for comment in comments:
            comment = apply_comment_hooks(processors, comment)
            draft = self._classifier.classify(draft, resolve_tags(comment))
        return finalize_module(draft)

    def parse_all(
        self, files: list[ModuleFile]
    ) -> tuple[list[ModuleRecord], list[ModuleError]]:
        """Parse many modules concurrently.

        A module that cannot be read is reported as an error and does not
        stop the others.

        Args:
            files: Module identities.

        Returns:
            Records and per-module errors, both in input order.
        """
        results: list[ModuleRecord | None] = [None] * len(files)
        failures: list[ModuleError | None] = [None] * len(files)
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=self._max_workers
        ) as executor:
            future_to_index = {
                executor.submit(self.parse, file): index
                for index, file in enumerate(files)
            }
            for future in concurrent.futures.as_completed(future_to_index):
                index = future_to_index[future]
                try:
                    results[index] = future.result()
                except ModuleReadError as exc:
                    logger.warning(
                        f"Skipping unreadable module (file_path={files[index].full_path} error={exc})"
                    )
                    failures[index] = ModuleError(
                        file_path=files[index].full_path, message=str(exc)
                    )

        errors = [error for error in failures if error is not None]
        records = [record for record in results if record is not None]
        logger.info(
            f"Module parsing completed (modules={len(records)} errors={len(errors)})"
        )
        return records, errors


def finalize_module(draft: ModuleDraft) -> ModuleRecord:
    """Sort, listify and filter a draft into a finished module record.

    Args:
        draft: Draft after every comment has been classified.

    Returns:
        Module record with sorted members and public variables/functions.
    """
    classes = tuple(
        ClassRecord(
            constructor=clazz.constructor,
            properties=sort_members(clazz.properties),
            methods=sort_members(clazz.methods),
        )
        for clazz in draft.classes.values()
    )
    mixins = tuple(
        MixinRecord(
            declaration=mixin.declaration,
            properties=sort_members(mixin.properties),
            methods=sort_members(mixin.methods),
        )
        for mixin in draft.mixins.values()
    )
    return ModuleRecord(
        name=draft.name,
        path=draft.path,
        description=draft.description or "",
        is_deprecated=draft.is_deprecated,
        deprecation_message=draft.deprecation_message,
        variables=_public(sort_members(draft.variables)),
        functions=_public(sort_members(draft.functions)),
        classes=classes,
        mixins=mixins,
        dependencies=tuple(
            sorted(draft.dependencies, key=lambda dependency: dependency.name.lower())
        ),
        exports=draft.exports,
    )


def sort_members(members: Iterable[CommentRecord]) -> tuple[CommentRecord, ...]:
    """Sort members by declared name; ties keep their original order."""
    return tuple(sorted(members, key=lambda member: member.name))


def _public(members: tuple[CommentRecord, ...]) -> tuple[CommentRecord, ...]:
    return tuple(member for member in members if member.is_private is False)
