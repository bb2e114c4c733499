"""template-admin scaffolder -- creates projects from template documents.

Quick usage::

    from template_admin.scaffolder import ProjectScaffolder
    from template_admin.templates import load_template

    template = load_template("templates/shop.json")
    scaffolder = ProjectScaffolder(template, "templates/shop.json", "pnpm")
    project_path = await scaffolder.generate("/tmp/my-shop")
"""

from template_admin.scaffolder.generator import (
    INSTALL_COMMANDS,
    ProjectScaffolder,
    install_dependencies_command,
    normalize_project_name,
)

__all__ = [
    "INSTALL_COMMANDS",
    "ProjectScaffolder",
    "install_dependencies_command",
    "normalize_project_name",
]
