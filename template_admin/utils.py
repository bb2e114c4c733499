"""Shared utility functions for template-admin.

Provides async command execution, JSON I/O, name sanitising and Rich-based
console reporting.  Everything user-visible is printed through the shared
``console`` so that tests and the CLI see one output stream.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: str | list[str],
    cwd: str | Path | None = None,
    timeout: int = 600,
    capture: bool = True,
) -> tuple[int, str, str]:
    """Run a shell command asynchronously.

    Args:
        cmd: Shell command string or list of arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams, which is what interactive installers want).

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  On timeout the return code
        is ``-1`` and stderr explains why.
    """
    stdout_pipe = asyncio.subprocess.PIPE if capture else None
    stderr_pipe = asyncio.subprocess.PIPE if capture else None

    if isinstance(cmd, list):
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=stdout_pipe,
            stderr=stderr_pipe,
            cwd=str(cwd) if cwd else None,
        )
    else:
        process = await asyncio.create_subprocess_shell(
            cmd,
            stdout=stdout_pipe,
            stderr=stderr_pipe,
            cwd=str(cwd) if cwd else None,
        )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return -1, "", f"Command timed out after {timeout}s"

    stdout = stdout_bytes.decode("utf-8", errors="replace") if stdout_bytes else ""
    stderr = stderr_bytes.decode("utf-8", errors="replace") if stderr_bytes else ""
    return process.returncode or 0, stdout, stderr


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_name(name: str) -> str:
    """Convert an arbitrary name to a package-safe project name.

    * Lowercases the input.
    * Replaces every character outside ``[a-z0-9-]`` with a hyphen.
    * Collapses consecutive hyphens.

    Examples::

        sanitize_name("My App") -> "my-app"
        sanitize_name("shop_front 2") -> "shop-front-2"
    """
    result = re.sub(r"[^a-z0-9-]", "-", name.lower())
    return re.sub(r"-{2,}", "-", result)


def quote_path(path: str | Path) -> str:
    """Wrap *path* in double quotes when it contains spaces."""
    text = str(path)
    if " " in text:
        return f'"{text}"'
    return text


def to_posix(path: str | Path) -> str:
    """Return *path* with forward-slash separators regardless of host OS."""
    return str(path).replace("\\", "/")


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        return {"_root": data}
    return data


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON (two-space indent).

    Parent directories are created automatically.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    file_path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a plain informational line."""
    console.print(message, highlight=False)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def absolute_path(path: str | Path, base: str | Path | None = None) -> Path:
    """Make *path* absolute and normalised without following symlinks.

    Relative paths are resolved against *base* (default: the working
    directory).  ``..`` segments are collapsed lexically.
    """
    import os

    text = str(path)
    if base is not None and not os.path.isabs(text):
        text = os.path.join(str(base), text)
    return Path(os.path.abspath(text))
