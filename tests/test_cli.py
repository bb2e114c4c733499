"""Tests for the command-line interface (template_admin.cli).

Covers:
- Argument validation (missing arguments, unknown package managers)
- ``extract`` end to end against an aliased project
- ``create`` without the external create/install commands
- ``templates`` list/new/show/remove/delete
- ``config`` show and set-default-path
- Error reporting and exit codes
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from template_admin.cli import build_parser, main
from template_admin.config import AdminConfig
from template_admin.templates.store import load_template

pytestmark = pytest.mark.unit


def _exit_code(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


class TestArguments:
    def test_no_command(self):
        assert _exit_code([]) == 2

    @pytest.mark.parametrize(
        "argv",
        [
            ["extract"],
            ["extract", "a.tsx", "t.json"],
            ["create", "./app"],
            ["templates"],
            ["templates", "show"],
            ["config", "set-default-path"],
        ],
    )
    def test_missing_arguments(self, argv: list[str]):
        assert _exit_code(argv) == 2

    def test_unknown_package_manager(self, sample_template_path: Path, tmp_path: Path):
        assert _exit_code(["create", str(tmp_path / "app"), str(sample_template_path), "pip"]) == 2

    def test_unknown_alias_strategy(self):
        assert _exit_code(["extract", "a", "b", "c", "--alias-strategy", "shortest"]) == 2

    def test_parser_defaults(self):
        args = build_parser().parse_args(["create", "app", "t.json", "yarn"])
        assert args.nest_in_src == "ask"
        assert not args.skip_create
        assert not args.skip_install

    def test_package_manager_optional(self):
        args = build_parser().parse_args(["create", "app", "t.json"])
        assert args.package_manager is None


# ---------------------------------------------------------------------------
# extract
# ---------------------------------------------------------------------------


class TestExtract:
    def test_extract_writes_template(self, sample_project: Path, tmp_path: Path):
        template_path = tmp_path / "out" / "shop.json"

        main(
            [
                "extract",
                str(sample_project / "src" / "pages" / "Home.tsx"),
                str(template_path),
                str(sample_project),
            ]
        )

        data = json.loads(template_path.read_text(encoding="utf-8"))
        assert [f["target"] for f in data["files"]][-1] == "src/pages/Home.tsx"
        assert data["dependencies"] == ["axios", "clsx", "zustand"]

    def test_missing_artifact_exits_nonzero(self, sample_project: Path, tmp_path: Path):
        code = _exit_code(
            ["extract", str(sample_project / "nope.tsx"), str(tmp_path / "t.json"), str(sample_project)]
        )
        assert code == 1

    def test_malformed_tsconfig(self, make_project, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        root = make_project({"tsconfig.json": '{"compilerOptions": ', "a.ts": "export {};\n"})
        template_path = tmp_path / "t.json"

        assert _exit_code(["extract", str(root / "a.ts"), str(template_path), str(root)]) == 1
        assert "Could not parse" in capsys.readouterr().out
        assert not template_path.exists()


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


class TestCreate:
    def test_create_local(self, sample_template_path: Path, tmp_path: Path):
        project = tmp_path / "new-shop"

        main(
            [
                "create",
                str(project),
                str(sample_template_path),
                "npm",
                "--skip-create",
                "--skip-install",
                "--nest-in-src",
                "never",
            ]
        )

        assert (project / "components" / "Header.tsx").is_file()
        assert (project / "lib" / "config.ts").read_text(encoding="utf-8") == "export const config = {};\n"

    def test_relative_path_uses_default_project_path(self, sample_template_path: Path, tmp_path: Path):
        projects = tmp_path / "projects"
        AdminConfig(default_project_path=str(projects)).save()

        main(
            [
                "create",
                "shop",
                str(sample_template_path),
                "bun",
                "--skip-create",
                "--skip-install",
                "--nest-in-src",
                "never",
            ]
        )

        assert (projects / "shop" / "components" / "Header.tsx").is_file()

    def test_package_manager_from_config(self, sample_template_path: Path, tmp_path: Path):
        AdminConfig(package_manager="pnpm").save()
        mock_run = AsyncMock(return_value=(0, "", ""))

        with patch("template_admin.scaffolder.generator.run_command", mock_run):
            main(
                [
                    "create",
                    str(tmp_path / "app"),
                    str(sample_template_path),
                    "--skip-create",
                    "--nest-in-src",
                    "never",
                ]
            )

        mock_run.assert_awaited_once()
        assert mock_run.await_args.args[0] == ["pnpm", "add", "react"]

    def test_explicit_package_manager_wins(self, sample_template_path: Path, tmp_path: Path):
        AdminConfig(package_manager="pnpm").save()
        mock_run = AsyncMock(return_value=(0, "", ""))

        with patch("template_admin.scaffolder.generator.run_command", mock_run):
            main(
                [
                    "create",
                    str(tmp_path / "app"),
                    str(sample_template_path),
                    "yarn",
                    "--skip-create",
                    "--nest-in-src",
                    "never",
                ]
            )

        assert mock_run.await_args.args[0] == ["yarn", "add", "react"]

    def test_missing_template(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        code = _exit_code(["create", str(tmp_path / "app"), str(tmp_path / "ghost.json"), "npm"])
        assert code == 1
        assert "Template file" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# templates
# ---------------------------------------------------------------------------


class TestTemplates:
    def test_lifecycle(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        directory = tmp_path / "tpl"
        base = ["templates", "--dir", str(directory)]

        main([*base, "new", "blog.json"])
        main([*base, "new", "shop.json"])
        capsys.readouterr()

        main([*base, "list"])
        out = capsys.readouterr().out
        assert out.index("blog.json") < out.index("shop.json")

        main([*base, "delete", "blog.json", "--yes"])
        assert not (directory / "blog.json").exists()

    def test_new_existing_fails(self, sample_template_path: Path):
        argv = ["templates", "--dir", str(sample_template_path.parent), "new", "shop.json"]
        assert _exit_code(argv) == 1

    def test_list_empty(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        (tmp_path / "empty").mkdir()
        main(["templates", "--dir", str(tmp_path / "empty"), "list"])
        assert "No templates available." in capsys.readouterr().out

    def test_list_uses_config_directory(self, admin_home: Path, capsys: pytest.CaptureFixture[str]):
        (admin_home / "templates").mkdir(parents=True)
        (admin_home / "templates" / "base.json").write_text("{}", encoding="utf-8")
        main(["templates", "list"])
        assert "base.json" in capsys.readouterr().out

    def test_show(self, sample_template_path: Path, capsys: pytest.CaptureFixture[str]):
        main(["templates", "--dir", str(sample_template_path.parent), "show", "shop.json"])
        out = capsys.readouterr().out
        assert "react" in out
        assert "lint" in out

    def test_remove_component(self, sample_template_path: Path):
        main(["templates", "--dir", str(sample_template_path.parent), "remove", "shop.json", "lib/config.ts"])
        template = load_template(sample_template_path)
        assert [f.target for f in template.files] == ["components/Header.tsx"]

    def test_remove_unknown_component(self, sample_template_path: Path, capsys: pytest.CaptureFixture[str]):
        argv = ["templates", "--dir", str(sample_template_path.parent), "remove", "shop.json", "nope.ts"]
        assert _exit_code(argv) == 1
        assert "components/Header.tsx" in capsys.readouterr().out
        assert len(load_template(sample_template_path).files) == 2


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


class TestConfigCommand:
    def test_show_creates_config(self, admin_home: Path, capsys: pytest.CaptureFixture[str]):
        main(["config", "show"])
        assert (admin_home / "config.json").is_file()
        assert "first" in capsys.readouterr().out

    def test_set_default_path(self, admin_home: Path):
        main(["config", "set-default-path", "/srv/projects"])
        assert AdminConfig.load(admin_home / "config.json").default_project_path == "/srv/projects"
