"""Project scaffolding from a template document.

Creates the base app with an external command, installs the template's
dependencies with the chosen package manager, then lays down the template's
directories and files and merges its ``packageScripts`` into
``package.json``.
"""

from __future__ import annotations

import asyncio
import shutil
import warnings
from collections.abc import Callable
from pathlib import Path

from rich.markup import escape
from rich.prompt import Confirm

from template_admin.config import PACKAGE_MANAGERS, AdminConfig
from template_admin.errors import MalformedTemplateEntry, ScaffoldError
from template_admin.templates.models import Template
from template_admin.utils import (
    absolute_path,
    load_json,
    print_info,
    print_success,
    print_warning,
    quote_path,
    run_command,
    sanitize_name,
    save_json,
)


# ---------------------------------------------------------------------------
# Package-manager commands
# ---------------------------------------------------------------------------

INSTALL_COMMANDS: dict[str, list[str]] = {
    "yarn": ["yarn", "add"],
    "npm": ["npm", "install"],
    "pnpm": ["pnpm", "add"],
    "bun": ["bun", "add"],
}

# Decides whether a path outside ``src/`` goes inside it: (kind, path) -> bool.
PlacementCallback = Callable[[str, str], bool]


def ask_placement(kind: str, path: str) -> bool:
    """Ask on the terminal whether *path* should live inside ``src/``."""
    return Confirm.ask(f"Should the {kind} [cyan]{escape(path)}[/cyan] be placed inside the src folder?")


def normalize_project_name(project_path: str | Path) -> str:
    """Package-safe name derived from the last component of *project_path*."""
    return sanitize_name(Path(project_path).name)


def install_dependencies_command(package_manager: str, dependencies: list[str]) -> list[str]:
    """Install command for *dependencies*; alias specifiers (``@/...``) are dropped."""
    if package_manager not in INSTALL_COMMANDS:
        raise ScaffoldError(
            "install",
            f"Unknown package manager {package_manager!r}; expected one of {', '.join(PACKAGE_MANAGERS)}",
        )
    packages = [dep for dep in dependencies if not dep.startswith("@/")]
    return [*INSTALL_COMMANDS[package_manager], *packages]


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------


class ProjectScaffolder:
    """Creates a project from a :class:`Template`.

    Attributes:
        template: The template to apply.
        template_path: Location of the template document; ``source`` entries
            are resolved relative to its directory.
        package_manager: One of ``yarn``, ``npm``, ``pnpm``, ``bun``.
        config: Scaffold command and timeout settings.
        placement: Callback consulted for paths outside ``src/`` when the
            created project has a ``src/`` directory.
    """

    def __init__(
        self,
        template: Template,
        template_path: str | Path,
        package_manager: str,
        config: AdminConfig | None = None,
        *,
        placement: PlacementCallback = ask_placement,
        skip_create: bool = False,
        skip_install: bool = False,
    ) -> None:
        if package_manager not in INSTALL_COMMANDS:
            raise ScaffoldError(
                "setup",
                f"Unknown package manager {package_manager!r}; expected one of {', '.join(PACKAGE_MANAGERS)}",
            )
        self.template = template
        self.template_path = Path(template_path)
        self.package_manager = package_manager
        self.config = config or AdminConfig()
        self.placement = placement
        self.skip_create = skip_create
        self.skip_install = skip_install

    # -- Public API --------------------------------------------------------

    async def generate(self, project_path: str | Path) -> Path:
        """Scaffold the project at *project_path* and return its absolute path."""
        project_root = absolute_path(project_path)

        # 1. Create the base app
        if self.skip_create:
            await asyncio.to_thread(project_root.mkdir, parents=True, exist_ok=True)
        else:
            await self._create_app(project_root)

        # 2. Install additional dependencies
        if self.template.dependencies and not self.skip_install:
            await self._install_dependencies(project_root)

        has_src = (project_root / "src").is_dir()

        # 3. Directories
        await self._create_directories(project_root, has_src)

        # 4. Files
        await self._create_files(project_root, has_src)

        # 5. package.json scripts
        await asyncio.to_thread(self._update_package_scripts, project_root)

        print_success("Project created and configured successfully!")
        return project_root

    # -- Steps -------------------------------------------------------------

    async def _create_app(self, project_root: Path) -> None:
        command = self.config.scaffold.create_command.format(path=quote_path(project_root))
        print_info(f"Creating project {normalize_project_name(project_root)}...")
        returncode, _, stderr = await run_command(
            command, timeout=self.config.scaffold.command_timeout, capture=False
        )
        if returncode != 0:
            raise ScaffoldError("create", stderr or f"command exited with {returncode}")
        if not project_root.is_dir():
            raise ScaffoldError("create", f"{project_root} was not created")

    async def _install_dependencies(self, project_root: Path) -> None:
        command = install_dependencies_command(self.package_manager, self.template.dependencies)
        if len(command) == len(INSTALL_COMMANDS[self.package_manager]):
            return
        print_info(f"Installing additional dependencies with {self.package_manager}...")
        returncode, _, stderr = await run_command(
            command,
            cwd=project_root,
            timeout=self.config.scaffold.command_timeout,
            capture=False,
        )
        if returncode != 0:
            raise ScaffoldError("install", stderr or f"command exited with {returncode}")

    async def _create_directories(self, project_root: Path, has_src: bool) -> None:
        for directory in self.template.directories:
            if directory in ("", "."):
                continue
            target = self._place("directory", directory, has_src)
            path = project_root / target
            if path.is_dir():
                print_info(f"Directory already exists: {escape(target)}")
                continue
            await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
            print_info(f"Created directory: {escape(target)}")

    async def _create_files(self, project_root: Path, has_src: bool) -> None:
        for entry in self.template.files:
            if entry.source is None and entry.content is None:
                message = f"File entry is missing 'source' or 'content': {entry.model_dump_json(exclude_none=True)}"
                print_warning(escape(message))
                warnings.warn(message, MalformedTemplateEntry, stacklevel=2)
                continue

            target = self._place("file", entry.target, has_src)
            path = project_root / target

            if entry.source is not None:
                source = self.template_path.parent / entry.source
                if not source.is_file():
                    print_warning(f"Template file not found: {escape(entry.source)}")
                    continue
                await asyncio.to_thread(_copy_file, source, path)
                print_info(f"Copied {escape(entry.source)} to {escape(target)}")
            else:
                await asyncio.to_thread(_write_file, path, (entry.content or "").strip())
                print_info(f"Created file: {escape(target)}")

    def _update_package_scripts(self, project_root: Path) -> None:
        package_json = project_root / "package.json"
        if not package_json.is_file():
            print_warning("package.json not found, skipping script updates.")
            return
        data = load_json(package_json)
        scripts = data.setdefault("scripts", {})
        scripts.update(self.template.package_scripts)
        save_json(data, package_json)
        print_info("Updated package.json scripts.")

    def _place(self, kind: str, relative: str, has_src: bool) -> str:
        """Final project-relative location for a template path."""
        if has_src and not relative.startswith("src/") and self.placement(kind, relative):
            return f"src/{relative}"
        return relative


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _copy_file(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)
