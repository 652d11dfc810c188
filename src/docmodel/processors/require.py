# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Processor collecting ``require`` dependencies from module text."""

import json
import re
from dataclasses import replace

from docmodel.model import Dependency, ModuleDraft
from docmodel.processor import ModuleProcessor

_REQUIRE_PATTERN = re.compile(r"""\brequire\s*\(\s*(["'])([^"'\s]+)\1\s*\)""")


def find_requires(source: str) -> list[str]:
    """Return required module ids in order of first appearance."""
    seen: dict[str, None] = {}
    for match in _REQUIRE_PATTERN.finditer(source):
        seen.setdefault(match.group(2), None)
    return list(seen)


def code_text(source: str) -> str:
    """Return the code to scan for ``require`` calls.

    A ``dox --raw`` JSON dump is reduced to its decoded ``code`` fields so
    escaped quotes do not hide the calls; any other text is returned as is.
    """
    if not source.lstrip().startswith("["):
        return source
    try:
        nodes = json.loads(source)
    except json.JSONDecodeError:
        return source
    if not isinstance(nodes, list):
        return source
    return "\n".join(
        node["code"]
        for node in nodes
        if isinstance(node, dict) and isinstance(node.get("code"), str)
    )


def require_processor(source: str) -> ModuleProcessor:
    """Build a processor that seeds the draft with ``require`` dependencies.

    The dependency name is the last path segment of the module id; the full
    id is kept as the dependency path.

    Args:
        source: Raw module text or its dox JSON dump.

    Returns:
        Processor with a module hook only.
    """
    dependencies = tuple(
        Dependency(name=module_id.rstrip("/").rsplit("/", 1)[-1], path=module_id)
        for module_id in find_requires(code_text(source))
    )

    def process_module(draft: ModuleDraft) -> ModuleDraft:
        return replace(draft, dependencies=draft.dependencies + dependencies)

    return ModuleProcessor(process_module=process_module)
