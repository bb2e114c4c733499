"""Resolve a module specifier to a file on disk."""

from __future__ import annotations

from pathlib import Path

from template_admin.utils import absolute_path

# Probe order matters: the first existing candidate wins.
EXTENSIONS: tuple[str, ...] = (".tsx", ".ts", ".jsx", ".js")


def resolve_module_file(specifier: str, base_dir: str | Path) -> Path | None:
    """Find the file *specifier* refers to, relative to *base_dir*.

    Tried in order: the exact path, the path plus each of :data:`EXTENSIONS`,
    then ``index`` plus each extension inside the path when it is a
    directory.  Returns ``None`` when nothing matches; callers treat that as
    an import left for external resolution.
    """
    candidate = absolute_path(specifier, base=base_dir)

    if candidate.is_file():
        return candidate

    for ext in EXTENSIONS:
        with_ext = Path(f"{candidate}{ext}")
        if with_ext.is_file():
            return with_ext

    if candidate.is_dir():
        for ext in EXTENSIONS:
            index_file = candidate / f"index{ext}"
            if index_file.is_file():
                return index_file

    return None
