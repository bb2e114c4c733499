"""Pydantic v2 models for template documents.

A template is a JSON document describing the directories, files, npm
dependencies and ``package.json`` scripts used to scaffold a new project::

    {
      "directories": ["components"],
      "files": [{"target": "components/Btn.tsx", "content": "..."}],
      "dependencies": ["axios"],
      "packageScripts": {"lint": "next lint"}
    }
"""

from __future__ import annotations

import posixpath
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileEntry(BaseModel):
    """One file of a template.

    Extracted files carry inline ``content``.  Hand-written templates may
    instead name a ``source`` file relative to the template document.
    """
    model_config = ConfigDict(extra="allow")

    target: str = Field(..., description="POSIX path relative to the project root")
    content: Optional[str] = Field(default=None, description="Inline file content")
    source: Optional[str] = Field(default=None, description="Template-relative file to copy")

    @property
    def directory(self) -> str:
        """Containing directory of ``target`` (``"."`` for root-level files)."""
        return posixpath.dirname(self.target) or "."


class Template(BaseModel):
    """A persisted scaffolding template."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    directories: list[str] = Field(default_factory=list, description="Directories to create")
    files: list[FileEntry] = Field(default_factory=list, description="Files to create or copy")
    dependencies: list[str] = Field(default_factory=list, description="Packages to install")
    package_scripts: dict[str, str] = Field(
        default_factory=dict,
        alias="packageScripts",
        description="Scripts merged into package.json",
    )

    def to_document(self) -> dict[str, Any]:
        """Serialise to the on-disk JSON shape (camelCase keys, no null fields)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
