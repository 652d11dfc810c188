# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Discovery of documented module files beneath a project root."""

import logging
import os
from pathlib import Path

import pathspec

from docmodel.model import ModuleFile

logger = logging.getLogger(__name__)

DOC_SUFFIX = ".html"


class IgnoreMatcher:
    """Match project paths against .gitignore patterns."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        """Initialize matcher.

        Args:
            spec: Compiled gitignore matcher.
        """
        self._spec = spec

    @classmethod
    def from_project_root(cls, root_path: Path) -> "IgnoreMatcher":
        """Build matcher from root and nested .gitignore files.

        Args:
            root_path: Project root.

        Returns:
            Configured ignore matcher.

        Raises:
            OSError: If .gitignore files cannot be read.
            UnicodeDecodeError: If .gitignore files contain invalid UTF-8.
        """
        patterns: list[str] = []
        for ignore_path in sorted(root_path.rglob(".gitignore")):
            base = ignore_path.parent.relative_to(root_path).as_posix()
            if base == ".":
                base = ""
            for line in ignore_path.read_text(encoding="utf-8").splitlines():
                patterns.append(_rebase_gitignore_line(line=line, base=base))
        return cls(spec=pathspec.GitIgnoreSpec.from_lines(patterns))

    def matches(self, relative_path: str, is_dir: bool) -> bool:
        """Check whether a root-relative path is ignored."""
        normalized = relative_path.replace(os.sep, "/").strip("/")
        if not normalized:
            return False
        if self._spec.match_file(normalized):
            return True
        return is_dir and self._spec.match_file(f"{normalized}/")


def collect_module_files(
    root_path: Path,
    suffixes: tuple[str, ...] = (".js",),
    matcher: IgnoreMatcher | None = None,
) -> list[ModuleFile]:
    """Collect documented module files in deterministic order.

    Directories are walked breadth first with children sorted by name;
    ``.git`` directories and ignored paths are skipped.

    Args:
        root_path: Project root to walk.
        suffixes: File suffixes of documented modules.
        matcher: Ignore matcher; built from the root's .gitignore files when
            omitted.

    Returns:
        Module identities with root-relative names and documentation paths.
    """
    matcher = matcher or IgnoreMatcher.from_project_root(root_path)
    files: list[ModuleFile] = []
    skipped = 0
    queue: list[Path] = [root_path]
    while queue:
        current = queue.pop(0)
        for child in sorted(current.iterdir(), key=lambda item: item.name):
            relative = child.relative_to(root_path)
            if child.name == ".git" and child.is_dir():
                continue
            is_dir = child.is_dir()
            if matcher.matches(relative_path=relative.as_posix(), is_dir=is_dir):
                skipped += 1
                continue
            if is_dir:
                queue.append(child)
                continue
            if child.suffix not in suffixes:
                continue
            stem = relative.with_suffix("")
            files.append(
                ModuleFile(
                    name=stem.as_posix(),
                    full_path=str(child),
                    doc_path=f"{stem.as_posix()}{DOC_SUFFIX}",
                )
            )
    logger.debug(
        f"Collected module files (root={root_path} files={len(files)} ignored={skipped})"
    )
    return files


def _rebase_gitignore_line(line: str, base: str) -> str:
    """Translate one .gitignore line to a root-relative pattern.

    Args:
        line: Original .gitignore line.
        base: Directory of the .gitignore file relative to the root.

    Returns:
        Root-relative pattern line.
    """
    if not base or not line.strip() or line.lstrip().startswith("#"):
        return line
    if line.startswith(r"\!") or line.startswith(r"\#"):
        return line
    is_negation = line.startswith("!")
    pattern = line[1:] if is_negation else line
    anchored = pattern.startswith("/")
    pattern = pattern[1:] if anchored else pattern
    if not pattern:
        rebased = base
    elif anchored or "/" in pattern.rstrip("/"):
        rebased = f"{base}/{pattern}"
    else:
        # Slash-less patterns match at any depth below their .gitignore.
        rebased = f"{base}/**/{pattern}"
    if anchored:
        rebased = f"/{rebased}"
    return f"!{rebased}" if is_negation else rebased
