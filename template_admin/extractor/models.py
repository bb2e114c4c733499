"""Pydantic v2 models for the dependency-extraction engine.

Defines alias maps, classified module specifiers, extracted file entries and
the per-run extraction context/result.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from template_admin.templates.models import FileEntry
from template_admin.utils import absolute_path


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class SpecifierKind(str, Enum):
    """How a module specifier is resolved."""
    RELATIVE = "relative"
    ALIASED = "aliased"
    EXTERNAL = "external"


class AliasStrategy(str, Enum):
    """Tie-break when several alias prefixes match one specifier.

    ``first`` keeps the insertion order of the path-mapping config;
    ``longest`` prefers the most specific prefix.
    """
    FIRST = "first"
    LONGEST = "longest"


# ---------------------------------------------------------------------------
# Alias map
# ---------------------------------------------------------------------------

DEFAULT_ALIAS = "@/"


class AliasMap(BaseModel):
    """Alias prefix -> absolute directory, loaded once per extraction run."""
    aliases: dict[str, Path] = Field(
        default_factory=dict, description="Alias prefix to absolute directory"
    )
    config_path: Optional[Path] = Field(
        default=None, description="tsconfig/jsconfig the aliases came from, if any"
    )
    strategy: AliasStrategy = Field(
        default=AliasStrategy.FIRST, description="Tie-break between matching aliases"
    )

    @classmethod
    def default(cls, project_root: Path, strategy: AliasStrategy = AliasStrategy.FIRST) -> "AliasMap":
        """The fallback map ``{"@/": <root>/src}``."""
        return cls(aliases={DEFAULT_ALIAS: absolute_path(project_root) / "src"}, strategy=strategy)

    def match(self, specifier: str) -> Optional[str]:
        """Return the alias prefix that applies to *specifier*, or ``None``."""
        candidates = [alias for alias in self.aliases if specifier.startswith(alias)]
        if not candidates:
            return None
        if self.strategy is AliasStrategy.LONGEST:
            return max(candidates, key=len)
        return candidates[0]

    def resolve(self, specifier: str) -> Optional[Path]:
        """Map an aliased specifier to the absolute path it names (unprobed)."""
        alias = self.match(specifier)
        if alias is None:
            return None
        return self.aliases[alias] / specifier[len(alias):]


# ---------------------------------------------------------------------------
# Scanned specifiers
# ---------------------------------------------------------------------------

class ModuleSpecifier(BaseModel):
    """A module specifier found in source text."""
    value: str = Field(..., description="Specifier text between the quotes")
    kind: SpecifierKind = Field(..., description="Relative, aliased or external")
    alias: Optional[str] = Field(default=None, description="Matched alias prefix (aliased only)")
    start: int = Field(..., description="Offset of the specifier text in the source")
    end: int = Field(..., description="Offset just past the specifier text")


# ---------------------------------------------------------------------------
# Extraction state
# ---------------------------------------------------------------------------

class ExtractionResult(BaseModel):
    """Everything one extraction run discovered."""
    files: list[FileEntry] = Field(
        default_factory=list, description="Extracted files, dependencies before dependents"
    )
    dependencies: list[str] = Field(
        default_factory=list, description="External package names, first-seen order"
    )
    missing_files: list[Path] = Field(
        default_factory=list, description="Referenced files that did not exist"
    )
    unreadable_files: list[Path] = Field(
        default_factory=list, description="Files that exist but could not be read as UTF-8 text"
    )
    alias_map: AliasMap = Field(default_factory=AliasMap)
