"""Template documents on disk.

Loading, saving, listing, creating and deleting ``*.json`` templates, and
removing individual components (file targets or directories) from them.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from template_admin.errors import TemplateError
from template_admin.utils import load_json, save_json

from .models import Template


# ---------------------------------------------------------------------------
# Single documents
# ---------------------------------------------------------------------------


def load_template(path: str | Path, *, missing_ok: bool = False) -> Template:
    """Read a template document.

    Args:
        path: JSON file to read.
        missing_ok: Return an empty template instead of failing when *path*
            does not exist.

    Raises:
        TemplateError: If the file is missing (and not *missing_ok*), is not
            valid JSON, or does not have the template shape.
    """
    file_path = Path(path)
    if not file_path.exists():
        if missing_ok:
            return Template()
        raise TemplateError(f"Template file {file_path} not found.")

    try:
        data = load_json(file_path)
    except (OSError, json.JSONDecodeError) as exc:
        raise TemplateError(f"Error reading template {file_path}: {exc}") from exc

    try:
        return Template.model_validate(data)
    except ValidationError as exc:
        raise TemplateError(f"Invalid template {file_path}: {exc}") from exc


def save_template(template: Template, path: str | Path) -> Path:
    """Write *template* as two-space-indented JSON and return the path."""
    file_path = Path(path)
    try:
        save_json(template.to_document(), file_path)
    except OSError as exc:
        raise TemplateError(f"Error writing template {file_path}: {exc}") from exc
    return file_path


# ---------------------------------------------------------------------------
# Template directory
# ---------------------------------------------------------------------------


def list_templates(templates_dir: str | Path) -> list[str]:
    """File names of every ``*.json`` template in *templates_dir*, sorted."""
    directory = Path(templates_dir)
    if not directory.is_dir():
        raise TemplateError(f"Templates directory {directory} not found.")
    return sorted(p.name for p in directory.glob("*.json") if p.is_file())


def create_template(templates_dir: str | Path, name: str) -> Path:
    """Create an empty template called *name* (which must end in ``.json``)."""
    if not name.endswith(".json") or Path(name).name != name:
        raise TemplateError(
            f"Valid template name with .json extension is required, got {name!r}."
        )
    path = Path(templates_dir) / name
    if path.exists():
        raise TemplateError(f"Template {name} already exists.")
    return save_template(Template(), path)


def delete_template(templates_dir: str | Path, name: str) -> Path:
    """Delete the template file *name* from *templates_dir*."""
    path = Path(templates_dir) / name
    if not path.is_file():
        raise TemplateError(f"Template {name} not found in {templates_dir}.")
    try:
        path.unlink()
    except OSError as exc:
        raise TemplateError(f"Error deleting template: {exc}") from exc
    return path


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def list_components(template: Template) -> list[str]:
    """File targets followed by directories."""
    return [entry.target for entry in template.files] + list(template.directories)


def remove_component(template: Template, component: str) -> bool:
    """Drop every file entry and directory equal to *component*.

    Returns ``True`` if anything was removed.
    """
    files = [entry for entry in template.files if entry.target != component]
    directories = [d for d in template.directories if d != component]
    removed = len(files) != len(template.files) or len(directories) != len(template.directories)
    template.files = files
    template.directories = directories
    return removed
