"""Shared pytest fixtures for the template-admin test suite.

Provides reusable fixtures for:
- Isolated configuration home directories
- Building small JavaScript/TypeScript projects on disk
- A sample aliased Next.js-style project
- Sample template documents
"""

from __future__ import annotations

import json
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def admin_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point TEMPLATE_ADMIN_HOME at a temp dir so no test touches ``~``."""
    home = tmp_path / "admin-home"
    monkeypatch.setenv("TEMPLATE_ADMIN_HOME", str(home))
    for var in (
        "TEMPLATE_ADMIN_TEMPLATES_DIR",
        "TEMPLATE_ADMIN_ALIAS_STRATEGY",
        "TEMPLATE_ADMIN_DEFAULT_PROJECT_PATH",
        "TEMPLATE_ADMIN_PACKAGE_MANAGER",
    ):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory writing ``{relative_path: content}`` under a fresh project root."""

    def _make(files: dict[str, str], name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return root

    return _make


@pytest.fixture
def sample_project(make_project: Callable[..., Path]) -> Path:
    """A small aliased project.

    ``src/pages/Home.tsx`` imports a button through ``@/``, a hook through a
    relative path, axios, and Next.js's own ``next/link``.
    """
    tsconfig = {
        "compilerOptions": {
            "baseUrl": ".",
            "paths": {"@/*": ["./src/*"]},
        }
    }
    return make_project(
        {
            "tsconfig.json": json.dumps(tsconfig, indent=2),
            "src/pages/Home.tsx": """\
                import Link from "next/link";
                import axios from "axios";
                import { Btn } from "@/components/Btn";
                import { useCart } from "../hooks/useCart";

                export default function Home() {
                  return <Btn onClick={() => axios.get("/api")}>Home</Btn>;
                }
            """,
            "src/components/Btn.tsx": """\
                import clsx from "clsx";
                import { theme } from "@/lib/theme";

                export function Btn(props) {
                  return <button className={clsx(theme.btn)} {...props} />;
                }
            """,
            "src/lib/theme.ts": """\
                export const theme = { btn: "btn" };
            """,
            "src/hooks/useCart.ts": """\
                const { create } = require("zustand");
                export const useCart = create(() => ({}));
            """,
        }
    )


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_template_data() -> dict[str, Any]:
    """A template document in its on-disk shape."""
    return {
        "directories": ["components", "lib"],
        "files": [
            {"target": "components/Header.tsx", "content": "  export const Header = () => null;\n"},
            {"target": "lib/config.ts", "source": "files/config.ts"},
        ],
        "dependencies": ["react"],
        "packageScripts": {"lint": "next lint"},
    }


@pytest.fixture
def sample_template_path(tmp_path: Path, sample_template_data: dict[str, Any]) -> Path:
    """The sample template written to disk with its ``source`` file beside it."""
    templates_dir = tmp_path / "templates"
    (templates_dir / "files").mkdir(parents=True)
    (templates_dir / "files" / "config.ts").write_text(
        "export const config = {};\n", encoding="utf-8"
    )
    path = templates_dir / "shop.json"
    path.write_text(json.dumps(sample_template_data, indent=2), encoding="utf-8")
    return path
