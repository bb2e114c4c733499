"""Dependency extraction for JavaScript/TypeScript projects.

Resolves path aliases from ``tsconfig.json``/``jsconfig.json``, scans
import specifiers, walks project-local imports and rewrites alias imports
into relative ones.

Usage::

    from template_admin.extractor import extract_dependencies

    result = extract_dependencies("src/pages/Home.tsx", project_root=".")
    print(result.dependencies)
    for entry in result.files:
        print(entry.target)
"""

from template_admin.extractor.aliases import load_alias_map
from template_admin.extractor.engine import (
    DependencyExtractor,
    ExtractionContext,
    extract_dependencies,
)
from template_admin.extractor.locator import resolve_module_file
from template_admin.extractor.models import (
    AliasMap,
    AliasStrategy,
    ExtractionResult,
    ModuleSpecifier,
    SpecifierKind,
)
from template_admin.extractor.rewriter import rewrite_alias_imports
from template_admin.extractor.scanner import (
    external_dependencies,
    internal_dependencies,
    scan_imports,
)

__all__ = [
    "AliasMap",
    "AliasStrategy",
    "DependencyExtractor",
    "ExtractionContext",
    "ExtractionResult",
    "ModuleSpecifier",
    "SpecifierKind",
    "extract_dependencies",
    "external_dependencies",
    "internal_dependencies",
    "load_alias_map",
    "resolve_module_file",
    "rewrite_alias_imports",
    "scan_imports",
]
