"""Dependency extraction engine.

Starting from one entry file, walks the graph of project-local imports,
collects external package names, rewrites alias imports to relative paths
and emits one :class:`FileEntry` per discovered file.  Files are emitted
after everything they import, so dependencies come before dependents.

The walk uses an explicit stack rather than recursion so deep import
chains cannot exhaust the interpreter's call stack.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from template_admin.errors import MissingFileError
from template_admin.templates.models import FileEntry
from template_admin.utils import absolute_path, print_error, print_info, to_posix

from .aliases import load_alias_map
from .models import AliasMap, ExtractionResult
from .rewriter import rewrite_alias_imports
from .scanner import DEFAULT_EXCLUDED_NAMESPACES, external_dependencies, internal_dependencies


@dataclass
class ExtractionContext:
    """Mutable state owned by a single extraction run."""

    project_root: Path
    alias_map: AliasMap
    excluded_namespaces: tuple[str, ...] = DEFAULT_EXCLUDED_NAMESPACES
    processed_files: set[Path] = field(default_factory=set)
    dependencies: dict[str, None] = field(default_factory=dict)
    files: list[FileEntry] = field(default_factory=list)
    missing_files: list[MissingFileError] = field(default_factory=list)
    unreadable_files: list[Path] = field(default_factory=list)

    def target_for(self, path: Path) -> str:
        """POSIX path of *path* relative to the project root."""
        return to_posix(os.path.relpath(path, self.project_root))

    def result(self) -> ExtractionResult:
        return ExtractionResult(
            files=list(self.files),
            dependencies=list(self.dependencies),
            missing_files=[err.path for err in self.missing_files],
            unreadable_files=list(self.unreadable_files),
            alias_map=self.alias_map,
        )


@dataclass
class _Frame:
    """A file whose imports are being walked."""

    path: Path
    content: str
    pending: list[Path]


class DependencyExtractor:
    """Extracts files and their local dependencies from a project."""

    def __init__(
        self,
        project_root: str | Path,
        alias_map: AliasMap | None = None,
        *,
        excluded_namespaces: Iterable[str] = DEFAULT_EXCLUDED_NAMESPACES,
    ) -> None:
        self.project_root = absolute_path(project_root)
        self.alias_map = alias_map if alias_map is not None else load_alias_map(self.project_root)
        self.excluded_namespaces = tuple(excluded_namespaces)

    def new_context(self) -> ExtractionContext:
        return ExtractionContext(
            project_root=self.project_root,
            alias_map=self.alias_map,
            excluded_namespaces=self.excluded_namespaces,
        )

    def extract(self, entry_file: str | Path) -> ExtractionResult:
        """Run one extraction starting at *entry_file*."""
        context = self.new_context()
        self.visit(absolute_path(entry_file), context)
        return context.result()

    # -- Traversal ---------------------------------------------------------

    def visit(self, entry: Path, context: ExtractionContext) -> None:
        """Walk everything reachable from *entry*, recording into *context*."""
        stack: list[_Frame] = []
        frame = self._open(entry, context)
        if frame is not None:
            stack.append(frame)

        while stack:
            top = stack[-1]
            if top.pending:
                dep = top.pending.pop(0)
                if dep in context.processed_files:
                    continue
                child = self._open(dep, context)
                if child is not None:
                    stack.append(child)
                continue

            stack.pop()
            self._emit(top, context)

    def _open(self, path: Path, context: ExtractionContext) -> _Frame | None:
        """Mark *path* visited, read it and record its external imports."""
        if path in context.processed_files:
            return None
        context.processed_files.add(path)

        if not path.is_file():
            error = MissingFileError(path)
            context.missing_files.append(error)
            print_error(escape(str(error)))
            return None

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            context.unreadable_files.append(path)
            print_error(escape(f"Could not read {path}: {exc}"))
            return None

        for name in external_dependencies(content, context.alias_map, context.excluded_namespaces):
            context.dependencies.setdefault(name, None)

        pending = internal_dependencies(content, path.parent, context.alias_map)
        return _Frame(path=path, content=content, pending=pending)

    def _emit(self, frame: _Frame, context: ExtractionContext) -> None:
        """Rewrite alias imports for the file's new home and append its entry."""
        target = context.target_for(frame.path)
        target_dir = absolute_path(Path(target).parent, base=context.project_root)
        content = rewrite_alias_imports(frame.content, target_dir, context.alias_map)
        context.files.append(FileEntry(target=target, content=content))
        print_info(f"Extracted: {escape(str(frame.path))} as {escape(target)}")


def extract_dependencies(
    entry_file: str | Path,
    project_root: str | Path,
    alias_map: AliasMap | None = None,
    *,
    excluded_namespaces: Iterable[str] = DEFAULT_EXCLUDED_NAMESPACES,
) -> ExtractionResult:
    """Extract *entry_file* and its local dependencies from *project_root*."""
    extractor = DependencyExtractor(
        project_root, alias_map, excluded_namespaces=excluded_namespaces
    )
    return extractor.extract(entry_file)
