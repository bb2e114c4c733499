"""Alias loading from ``tsconfig.json`` / ``jsconfig.json``.

Reads ``compilerOptions.paths`` and ``compilerOptions.baseUrl`` and turns
them into an :class:`AliasMap`.  Wildcards are dropped from both sides::

    "paths": {"@components/*": ["src/components/*"]}
    -> {"@components/": "<root>/src/components"}
"""

from __future__ import annotations

import json
import re
import warnings
from pathlib import Path
from typing import Any

from rich.markup import escape

from template_admin.errors import ConfigParseError, MissingConfigWarning
from template_admin.utils import absolute_path, print_warning

from .models import DEFAULT_ALIAS, AliasMap, AliasStrategy


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CONFIG_FILENAMES: tuple[str, ...] = ("tsconfig.json", "jsconfig.json")

# Strings are matched first so comment markers inside them survive.
_COMMENT_PATTERN = re.compile(
    r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL
)
_TRAILING_COMMA_PATTERN = re.compile(r'("(?:\\.|[^"\\])*")|,(\s*[}\]])')


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_path_config(project_root: str | Path) -> Path | None:
    """Return the first path-mapping config present in *project_root*."""
    root = Path(project_root)
    for filename in CONFIG_FILENAMES:
        candidate = root / filename
        if candidate.is_file():
            return candidate
    return None


def load_alias_map(
    project_root: str | Path,
    strategy: AliasStrategy = AliasStrategy.FIRST,
) -> AliasMap:
    """Build the alias map for *project_root*.

    Falls back to ``{"@/": <root>/src}`` with a :class:`MissingConfigWarning`
    when no config file exists.  The ``"@/"`` alias is always present.

    Raises:
        ConfigParseError: If the config file exists but cannot be parsed.
    """
    root = absolute_path(project_root)
    config_path = find_path_config(root)

    if config_path is None:
        message = (
            "No tsconfig.json or jsconfig.json found. "
            "Falling back to default alias mapping."
        )
        print_warning(message)
        warnings.warn(message, MissingConfigWarning, stacklevel=2)
        return AliasMap.default(root, strategy)

    data = _parse_config(config_path)
    compiler_options = data.get("compilerOptions") or {}
    if not isinstance(compiler_options, dict):
        raise ConfigParseError(config_path, "compilerOptions must be an object")

    paths = compiler_options.get("paths") or {}
    if not isinstance(paths, dict):
        raise ConfigParseError(config_path, "compilerOptions.paths must be an object")

    base_url = absolute_path(compiler_options.get("baseUrl") or ".", base=root)

    aliases: dict[str, Path] = {}
    for alias, targets in paths.items():
        if not isinstance(targets, list) or not targets or not isinstance(targets[0], str):
            print_warning(f"Ignoring alias {escape(alias)!r}: no target path")
            continue
        alias_key = _strip_wildcard(alias)
        aliases[alias_key] = absolute_path(_strip_wildcard(targets[0]), base=base_url)

    if DEFAULT_ALIAS not in aliases:
        aliases[DEFAULT_ALIAS] = root / "src"

    return AliasMap(aliases=aliases, config_path=config_path, strategy=strategy)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _strip_wildcard(value: str) -> str:
    """Drop a single trailing ``*``."""
    return value[:-1] if value.endswith("*") else value


def _strip_jsonc(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments plus trailing commas."""
    text = _COMMENT_PATTERN.sub(lambda m: m.group(1) or "", text)
    return _TRAILING_COMMA_PATTERN.sub(lambda m: m.group(1) or m.group(2), text)


def _parse_config(config_path: Path) -> dict[str, Any]:
    """Parse a tsconfig/jsconfig file, tolerating JSONC syntax."""
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigParseError(config_path, str(exc)) from exc

    try:
        data = json.loads(_strip_jsonc(raw))
    except json.JSONDecodeError as exc:
        raise ConfigParseError(config_path, str(exc)) from exc

    if not isinstance(data, dict):
        raise ConfigParseError(config_path, "top-level value must be an object")
    return data
