"""Merge extraction output into a template document."""

from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from template_admin.extractor.aliases import load_alias_map
from template_admin.extractor.engine import DependencyExtractor
from template_admin.extractor.models import AliasStrategy, ExtractionResult
from template_admin.extractor.scanner import DEFAULT_EXCLUDED_NAMESPACES
from template_admin.utils import print_success, print_summary_table, print_warning

from .models import FileEntry, Template
from .store import load_template, save_template


def merge_extraction(template: Template, result: ExtractionResult) -> Template:
    """Fold *result* into *template* in place and return it.

    * A file whose ``target`` already exists replaces that entry's content;
      new targets are appended in extraction order.
    * Each new file's directory is added to ``directories`` once.
    * ``dependencies`` becomes the union, existing names first.
    """
    positions = {entry.target: index for index, entry in enumerate(template.files)}
    for entry in result.files:
        if entry.target in positions:
            template.files[positions[entry.target]] = FileEntry(
                target=entry.target, content=entry.content
            )
        else:
            positions[entry.target] = len(template.files)
            template.files.append(entry.model_copy())

        if entry.directory not in template.directories:
            template.directories.append(entry.directory)

    known = set(template.dependencies)
    for name in result.dependencies:
        if name not in known:
            template.dependencies.append(name)
            known.add(name)

    return template


def extract_into_template(
    entry_file: str | Path,
    template_path: str | Path,
    project_root: str | Path,
    *,
    strategy: AliasStrategy = AliasStrategy.FIRST,
    excluded_namespaces: tuple[str, ...] = DEFAULT_EXCLUDED_NAMESPACES,
) -> tuple[Template, ExtractionResult]:
    """Extract *entry_file* from *project_root* and persist it into *template_path*.

    A missing template file is started fresh.  Files that could not be read
    are reported but do not stop the merge.
    """
    alias_map = load_alias_map(project_root, strategy)
    extractor = DependencyExtractor(
        project_root, alias_map, excluded_namespaces=excluded_namespaces
    )
    result = extractor.extract(entry_file)

    template = load_template(template_path, missing_ok=True)
    merge_extraction(template, result)
    save_template(template, template_path)

    if result.missing_files:
        print_warning(f"{len(result.missing_files)} referenced file(s) were not found.")
    if result.unreadable_files:
        print_warning(f"{len(result.unreadable_files)} file(s) could not be read and were skipped.")
    print_summary_table(
        {
            "Files extracted": str(len(result.files)),
            "Dependencies": ", ".join(result.dependencies) or "-",
            "Template": escape(str(template_path)),
        },
        title="Extraction",
    )
    print_success("Updated template configuration with extracted files and dependencies.")
    return template, result
