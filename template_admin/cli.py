"""Command-line interface for template-admin.

Usage::

    template-admin extract src/pages/Home.tsx templates/shop.json ./my-app
    template-admin create ./new-shop templates/shop.json pnpm
    template-admin templates list
    template-admin config set-default-path ~/Projects
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape
from rich.prompt import Confirm

from template_admin.config import PACKAGE_MANAGERS, AdminConfig, set_default_project_path
from template_admin.errors import TemplateAdminError
from template_admin.extractor.models import AliasStrategy
from template_admin.scaffolder.generator import ProjectScaffolder, ask_placement
from template_admin.templates.merger import extract_into_template
from template_admin.templates.store import (
    create_template,
    delete_template,
    list_components,
    list_templates,
    load_template,
    remove_component,
    save_template,
)
from template_admin.utils import console, print_error, print_info, print_success, print_summary_table


# ---------------------------------------------------------------------------
# Sub-command handlers
# ---------------------------------------------------------------------------


def _cmd_extract(args: argparse.Namespace, config: AdminConfig) -> int:
    strategy = AliasStrategy(args.alias_strategy) if args.alias_strategy else config.alias_strategy
    _, result = extract_into_template(
        args.artifact,
        args.template,
        args.project_root,
        strategy=strategy,
        excluded_namespaces=tuple(config.excluded_namespaces),
    )
    return 0 if result.files else 1


def _cmd_create(args: argparse.Namespace, config: AdminConfig) -> int:
    template_path = Path(args.template)
    template = load_template(template_path)

    project_path = Path(args.project_path)
    if not project_path.is_absolute() and config.default_project_path:
        project_path = Path(config.default_project_path) / project_path

    placement = {
        "ask": ask_placement,
        "always": lambda kind, path: True,
        "never": lambda kind, path: False,
    }[args.nest_in_src]

    scaffolder = ProjectScaffolder(
        template,
        template_path,
        args.package_manager or config.package_manager,
        config,
        placement=placement,
        skip_create=args.skip_create,
        skip_install=args.skip_install,
    )
    asyncio.run(scaffolder.generate(project_path))
    return 0


def _templates_dir(args: argparse.Namespace, config: AdminConfig) -> Path:
    return Path(args.dir) if args.dir else config.templates_dir


def _cmd_templates(args: argparse.Namespace, config: AdminConfig) -> int:
    directory = _templates_dir(args, config)

    if args.action == "list":
        names = list_templates(directory)
        if not names:
            print_info("No templates available.")
        for name in names:
            console.print(escape(name), highlight=False)
        return 0

    if args.action == "new":
        path = create_template(directory, args.name)
        print_success(f"New template created: {escape(path.name)}")
        return 0

    if args.action == "delete":
        if not args.yes and not Confirm.ask(
            f"Are you sure you want to delete template {escape(args.name)!r}?"
        ):
            return 0
        delete_template(directory, args.name)
        print_success(f"Template {escape(args.name)!r} deleted.")
        return 0

    template_path = directory / args.name
    template = load_template(template_path)

    if args.action == "show":
        print_summary_table(
            {
                "Directories": ", ".join(template.directories) or "-",
                "Files": ", ".join(entry.target for entry in template.files) or "-",
                "Dependencies": ", ".join(template.dependencies) or "-",
                "Scripts": ", ".join(template.package_scripts) or "-",
            },
            title=escape(args.name),
        )
        return 0

    # remove
    if not remove_component(template, args.component):
        print_error(f"Component {escape(args.component)!r} is not part of {escape(args.name)}.")
        print_info("Available: " + (escape(", ".join(list_components(template))) or "-"))
        return 1
    save_template(template, template_path)
    print_success(f"Component/folder {escape(args.component)!r} removed from the template.")
    return 0


def _cmd_config(args: argparse.Namespace, config: AdminConfig) -> int:
    if args.action == "set-default-path":
        config = set_default_project_path(args.path)
        print_success("Default project path updated.")
    print_summary_table(
        {
            "Config file": escape(str(AdminConfig.default_path())),
            "Default project path": escape(config.default_project_path) or "-",
            "Templates directory": escape(str(config.templates_dir)),
            "Alias strategy": config.alias_strategy.value,
            "Excluded namespaces": ", ".join(config.excluded_namespaces) or "-",
        },
        title="Configuration",
    )
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="template-admin",
        description="Scaffold web-app projects from JSON templates and extract files into them.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    extract = sub.add_parser(
        "extract",
        help="Extract a file and its local imports into a template",
    )
    extract.add_argument("artifact", help="Path of the file to extract")
    extract.add_argument("template", help="Template JSON file to update (created if absent)")
    extract.add_argument(
        "project_root",
        help="Root of the source project (where tsconfig.json or jsconfig.json lives)",
    )
    extract.add_argument(
        "--alias-strategy",
        choices=[s.value for s in AliasStrategy],
        default=None,
        help="Which alias wins when several match (default: from config)",
    )
    extract.set_defaults(handler=_cmd_extract)

    create = sub.add_parser("create", help="Create a new project from a template")
    create.add_argument("project_path", help="Directory of the new project")
    create.add_argument("template", help="Template JSON file")
    create.add_argument(
        "package_manager",
        nargs="?",
        choices=PACKAGE_MANAGERS,
        default=None,
        help="Package manager (default: from config)",
    )
    create.add_argument(
        "--nest-in-src",
        choices=["ask", "always", "never"],
        default="ask",
        help="Place template paths inside src/ when the project has one (default: ask)",
    )
    create.add_argument("--skip-create", action="store_true", help="Do not run the create-app command")
    create.add_argument("--skip-install", action="store_true", help="Do not install dependencies")
    create.set_defaults(handler=_cmd_create)

    templates = sub.add_parser("templates", help="Manage template files")
    templates.add_argument("--dir", default=None, help="Templates directory (default: from config)")
    actions = templates.add_subparsers(dest="action", required=True)
    actions.add_parser("list", help="List available templates")
    show = actions.add_parser("show", help="Summarise a template")
    show.add_argument("name")
    new = actions.add_parser("new", help="Create an empty template")
    new.add_argument("name", help="File name, e.g. my-template.json")
    delete = actions.add_parser("delete", help="Delete a template")
    delete.add_argument("name")
    delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    remove = actions.add_parser("remove", help="Remove a file or directory from a template")
    remove.add_argument("name")
    remove.add_argument("component", help="File target or directory to remove")
    templates.set_defaults(handler=_cmd_templates)

    cfg = sub.add_parser("config", help="Show or change settings")
    cfg_actions = cfg.add_subparsers(dest="action", required=True)
    cfg_actions.add_parser("show", help="Print the current configuration")
    set_path = cfg_actions.add_parser("set-default-path", help="Set the default project directory")
    set_path.add_argument("path")
    cfg.set_defaults(handler=_cmd_config)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``template-admin`` / ``python -m template_admin``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = AdminConfig.load_or_create()
        code = args.handler(args, config)
    except TemplateAdminError as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
