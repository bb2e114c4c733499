"""Import scanning for JavaScript/TypeScript source text.

Finds module specifiers in ``import``/``export ... from``/``require()``
statements with one regular expression and classifies each one as relative,
aliased or external.  This is text scanning, not a parse: specifiers inside
comments or string literals that look like imports are reported too.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from .locator import resolve_module_file
from .models import AliasMap, ModuleSpecifier, SpecifierKind


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_EXCLUDED_NAMESPACES: tuple[str, ...] = ("next",)

# Group 2 is the specifier text.  Covers:
#   import X from "m";  import { a } from 'm';  import "m";
#   export * from "m";  export { a } from "m";
#   require("m");  import("m")
_IMPORT_PATTERN = re.compile(
    r"""(?:\bimport\s+(?:[^'"]*?\s+from\s+)?|\bexport\s+[^'"]*?\s+from\s+|\brequire\(\s*|\bimport\(\s*)"""
    r"""(['"])([^'"]+)\1"""
)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def is_excluded(specifier: str, excluded_namespaces: Iterable[str]) -> bool:
    """True for the framework's own packages (``next``, ``next/link``...) and ``node:`` builtins."""
    if specifier.startswith("node:"):
        return True
    return any(
        specifier == ns or specifier.startswith(ns + "/")
        for ns in excluded_namespaces
    )


def classify_specifier(
    specifier: str,
    alias_map: AliasMap,
    excluded_namespaces: Iterable[str] = DEFAULT_EXCLUDED_NAMESPACES,
) -> tuple[SpecifierKind, str | None] | None:
    """Classify *specifier*; returns ``(kind, alias)`` or ``None`` if excluded.

    Relative wins over aliased, aliased over external.
    """
    if specifier.startswith((".", "/")):
        return SpecifierKind.RELATIVE, None
    alias = alias_map.match(specifier)
    if alias is not None:
        return SpecifierKind.ALIASED, alias
    if is_excluded(specifier, excluded_namespaces):
        return None
    return SpecifierKind.EXTERNAL, None


def package_name(specifier: str) -> str:
    """Reduce a bare specifier to its installable package name.

    ``lodash/debounce`` -> ``lodash``; ``@scope/pkg/sub`` -> ``@scope/pkg``.
    """
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) > 1:
        return "/".join(parts[:2])
    return parts[0]


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def scan_imports(
    text: str,
    alias_map: AliasMap,
    excluded_namespaces: Iterable[str] = DEFAULT_EXCLUDED_NAMESPACES,
) -> list[ModuleSpecifier]:
    """Return every classified specifier in *text*, in source order."""
    excluded = tuple(excluded_namespaces)
    found: list[ModuleSpecifier] = []
    for match in _IMPORT_PATTERN.finditer(text):
        value = match.group(2)
        classified = classify_specifier(value, alias_map, excluded)
        if classified is None:
            continue
        kind, alias = classified
        found.append(
            ModuleSpecifier(
                value=value,
                kind=kind,
                alias=alias,
                start=match.start(2),
                end=match.end(2),
            )
        )
    return found


def external_dependencies(
    text: str,
    alias_map: AliasMap,
    excluded_namespaces: Iterable[str] = DEFAULT_EXCLUDED_NAMESPACES,
) -> list[str]:
    """Package names imported by *text*, de-duplicated, first-seen order."""
    names: dict[str, None] = {}
    for spec in scan_imports(text, alias_map, excluded_namespaces):
        if spec.kind is SpecifierKind.EXTERNAL:
            names.setdefault(package_name(spec.value), None)
    return list(names)


def internal_dependencies(
    text: str,
    current_dir: str | Path,
    alias_map: AliasMap,
) -> list[Path]:
    """Absolute paths of project files imported by *text*.

    Relative specifiers resolve against *current_dir*; aliased ones against
    the alias directory.  Specifiers that match no file are omitted.
    """
    resolved: dict[Path, None] = {}
    for spec in scan_imports(text, alias_map):
        if spec.kind is SpecifierKind.RELATIVE:
            path = resolve_module_file(spec.value, current_dir)
        elif spec.kind is SpecifierKind.ALIASED and spec.alias is not None:
            path = resolve_module_file(
                spec.value[len(spec.alias):], alias_map.aliases[spec.alias]
            )
        else:
            continue
        if path is not None:
            resolved.setdefault(path, None)
    return list(resolved)
