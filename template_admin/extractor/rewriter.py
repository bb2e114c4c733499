"""Rewrite alias-based import specifiers into relative paths."""

from __future__ import annotations

import os
from pathlib import Path

from .models import AliasMap, SpecifierKind
from .scanner import scan_imports


def relative_specifier(target: str | Path, from_dir: str | Path) -> str:
    """Relative import path from *from_dir* to *target*.

    Always uses ``/`` and always starts with ``.`` (``./`` is prepended when
    the relative path would otherwise be bare).
    """
    rel = os.path.relpath(target, from_dir).replace(os.sep, "/")
    if not rel.startswith("."):
        rel = "./" + rel
    return rel


def rewrite_alias_imports(text: str, target_dir: str | Path, alias_map: AliasMap) -> str:
    """Replace every aliased specifier in *text* with a relative one.

    *target_dir* is the absolute directory the file will live in.  Relative
    and external specifiers, and everything outside the quotes, are left
    untouched.
    """
    pieces: list[str] = []
    cursor = 0
    for spec in scan_imports(text, alias_map, excluded_namespaces=()):
        if spec.kind is not SpecifierKind.ALIASED:
            continue
        target = alias_map.resolve(spec.value)
        if target is None:
            continue
        pieces.append(text[cursor:spec.start])
        pieces.append(relative_specifier(target, target_dir))
        cursor = spec.end
    pieces.append(text[cursor:])
    return "".join(pieces)
