"""Template documents: models and on-disk storage.

Merging extraction output lives in :mod:`template_admin.templates.merger`.
"""

from template_admin.templates.models import FileEntry, Template
from template_admin.templates.store import (
    create_template,
    delete_template,
    list_components,
    list_templates,
    load_template,
    remove_component,
    save_template,
)

__all__ = [
    "FileEntry",
    "Template",
    "create_template",
    "delete_template",
    "list_components",
    "list_templates",
    "load_template",
    "remove_component",
    "save_template",
]
