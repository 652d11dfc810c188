# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for module documentation."""

from collections.abc import Mapping
from dataclasses import dataclass, field

from docmodel.comment import CommentRecord


class ModuleReadError(RuntimeError):
    """Represent a failure to read a module's source text."""


@dataclass(frozen=True)
class ModuleFile:
    """Represent the external identity of one documented module.

    Attributes:
        name: Module name, the root-relative path without suffix.
        full_path: Filesystem path of the module source.
        doc_path: Root-relative path of the generated documentation page.
    """

    name: str
    full_path: str
    doc_path: str


@dataclass(frozen=True)
class ModuleError:
    """Represent a module that could not be documented."""

    file_path: str
    message: str


@dataclass(frozen=True)
class Dependency:
    """Represent a module dependency."""

    name: str
    path: str | None = None


@dataclass(frozen=True)
class ClassRecord:
    """Represent a class keyed by its constructor comment."""

    constructor: CommentRecord
    properties: tuple[CommentRecord, ...] = ()
    methods: tuple[CommentRecord, ...] = ()


@dataclass(frozen=True)
class MixinRecord:
    """Represent a mixin keyed by its declaration comment."""

    declaration: CommentRecord
    properties: tuple[CommentRecord, ...] = ()
    methods: tuple[CommentRecord, ...] = ()


@dataclass(frozen=True)
class ModuleDraft:
    """Represent a module record while it is being assembled.

    Classes and mixins are kept in insertion-ordered mappings keyed by name so
    members can be attached by owner lookup. Processors receive and return
    drafts.

    Attributes:
        name: Module name.
        path: Documentation path.
        description: Rendered description; ``None`` until one is found.
        is_deprecated: Whether the module is deprecated.
        deprecation_message: Text of the ``deprecated`` tag.
        variables: Variable comments in classification order.
        functions: Function comments in classification order.
        classes: Registered classes by constructor name.
        mixins: Registered mixins by declared name.
        dependencies: Module dependencies.
        exports: Exported names.
    """

    name: str
    path: str
    description: str | None = None
    is_deprecated: bool = False
    deprecation_message: str | None = None
    variables: tuple[CommentRecord, ...] = ()
    functions: tuple[CommentRecord, ...] = ()
    classes: Mapping[str, ClassRecord] = field(default_factory=dict)
    mixins: Mapping[str, MixinRecord] = field(default_factory=dict)
    dependencies: tuple[Dependency, ...] = ()
    exports: tuple[str, ...] = ()


@dataclass(frozen=True)
class ModuleRecord:
    """Represent the finished documentation of one module.

    ``variables`` and ``functions`` hold public members only. Member
    collections are sorted by name; ``classes`` and ``mixins`` keep
    registration order.
    """

    name: str
    path: str
    description: str
    is_deprecated: bool
    deprecation_message: str | None
    variables: tuple[CommentRecord, ...]
    functions: tuple[CommentRecord, ...]
    classes: tuple[ClassRecord, ...]
    mixins: tuple[MixinRecord, ...]
    dependencies: tuple[Dependency, ...]
    exports: tuple[str, ...]
