"""template-admin configuration.

User settings live in ``<home>/config.json`` where ``<home>`` is
``$TEMPLATE_ADMIN_HOME`` or ``~/.template-admin``.  All settings are Pydantic
v2 models so they are validated at construction time and serialised to/from
JSON without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, get_args

from pydantic import BaseModel, Field, ValidationError

from template_admin.extractor.models import AliasStrategy
from template_admin.utils import print_warning

PackageManager = Literal["yarn", "npm", "pnpm", "bun"]

PACKAGE_MANAGERS: tuple[str, ...] = get_args(PackageManager)

DEFAULT_HOME = Path.home() / ".template-admin"


def admin_home() -> Path:
    """Directory holding ``config.json`` and, by default, the templates."""
    return Path(os.environ.get("TEMPLATE_ADMIN_HOME", str(DEFAULT_HOME)))


class ScaffoldConfig(BaseModel):
    """Knobs for the project scaffolder."""

    create_command: str = Field(
        default="npx create-next-app@latest {path} --ts --tailwind --eslint --app",
        description="Command that creates the base app; {path} is the quoted project path",
    )
    command_timeout: int = Field(
        default=900, ge=10, description="Per-command timeout in seconds"
    )


class AdminConfig(BaseModel):
    """Global template-admin configuration."""

    default_project_path: str = Field(
        default="", description="Directory new projects are created in by default"
    )
    templates_dir: Path = Field(default_factory=lambda: admin_home() / "templates")
    alias_strategy: AliasStrategy = Field(default=AliasStrategy.FIRST)
    excluded_namespaces: list[str] = Field(
        default_factory=lambda: ["next"],
        description="Framework packages never reported as dependencies",
    )
    package_manager: PackageManager = Field(
        default="npm", description="Used by `create` when no package manager is given"
    )
    scaffold: ScaffoldConfig = Field(default_factory=ScaffoldConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    @staticmethod
    def default_path() -> Path:
        """Location of the persisted configuration file."""
        return admin_home() / "config.json"

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to :meth:`default_path`.

        Returns:
            The path where the file was written.
        """
        target = path or self.default_path()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "AdminConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def load_or_create(cls, path: Path | None = None) -> "AdminConfig":
        """Load the saved configuration, writing defaults if it is absent.

        A corrupt file is reported and replaced with defaults.
        """
        target = path or cls.default_path()
        if target.exists():
            try:
                return cls.load(target)
            except (OSError, ValidationError) as exc:
                print_warning(f"Error parsing config file {target}: {exc}")
        config = cls.from_env()
        config.save(target)
        return config

    @classmethod
    def from_env(cls) -> "AdminConfig":
        """Build an ``AdminConfig`` from environment variables.

        Recognised variables (all optional):
            TEMPLATE_ADMIN_TEMPLATES_DIR, TEMPLATE_ADMIN_ALIAS_STRATEGY,
            TEMPLATE_ADMIN_DEFAULT_PROJECT_PATH, TEMPLATE_ADMIN_PACKAGE_MANAGER.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("TEMPLATE_ADMIN_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["TEMPLATE_ADMIN_TEMPLATES_DIR"])
        if os.environ.get("TEMPLATE_ADMIN_ALIAS_STRATEGY"):
            kwargs["alias_strategy"] = AliasStrategy(os.environ["TEMPLATE_ADMIN_ALIAS_STRATEGY"])
        if os.environ.get("TEMPLATE_ADMIN_DEFAULT_PROJECT_PATH"):
            kwargs["default_project_path"] = os.environ["TEMPLATE_ADMIN_DEFAULT_PROJECT_PATH"]
        if os.environ.get("TEMPLATE_ADMIN_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["TEMPLATE_ADMIN_PACKAGE_MANAGER"]
        return cls(**kwargs)


def set_default_project_path(value: str, path: Path | None = None) -> AdminConfig:
    """Update and persist ``default_project_path``; blank values are ignored."""
    config = AdminConfig.load_or_create(path)
    if value.strip():
        config.default_project_path = value.strip()
        config.save(path)
    return config
