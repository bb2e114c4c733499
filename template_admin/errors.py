"""Exception and warning types shared across template-admin."""

from __future__ import annotations

from pathlib import Path


class TemplateAdminError(Exception):
    """Base class for errors that abort a template-admin command."""


class ConfigParseError(TemplateAdminError):
    """Raised when a path-mapping config (tsconfig/jsconfig) is not valid JSON."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not parse {path}: {reason}")


class TemplateError(TemplateAdminError):
    """Raised when a template document cannot be read, written or located."""


class ScaffoldError(TemplateAdminError):
    """Raised when an external scaffolding or install command fails."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"{step}: {message}")


class MissingFileError(TemplateAdminError):
    """A file referenced during extraction does not exist.

    Never raised out of an extraction run; instances are collected on the
    result so the rest of the graph can still be processed.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class MissingConfigWarning(UserWarning):
    """No tsconfig.json or jsconfig.json was found; the default alias is used."""


class MalformedTemplateEntry(UserWarning):
    """A template file entry has neither ``source`` nor ``content``."""
