"""Dependency installation through the project's package manager."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from walrus_starter.models import PackageManager
from walrus_starter.utils import console, print_success, run_command


@dataclass
class InstallResult:
    success: bool
    error: Optional[str] = None


def install_command(package_manager: PackageManager | str) -> list[str]:
    """Return the argv used to install dependencies."""
    return [PackageManager(package_manager).value, "install"]


async def install_dependencies(
    project_path: str | Path,
    package_manager: PackageManager | str,
    timeout: int | None = 600,
) -> InstallResult:
    """Run ``<pm> install`` in *project_path* with the installer's own output.

    A missing executable or a non-zero exit is reported in the result, never
    raised.
    """
    cmd = install_command(package_manager)
    console.print(f"\n  Installing dependencies with [bold]{cmd[0]}[/bold]...")
    try:
        returncode, _, stderr = await run_command(
            cmd, cwd=project_path, timeout=timeout, capture=False
        )
    except OSError as exc:
        return InstallResult(success=False, error=f"{cmd[0]} could not be started: {exc}")

    if returncode != 0:
        return InstallResult(
            success=False,
            error=stderr or f"{' '.join(cmd)} exited with code {returncode}",
        )

    print_success("Dependencies installed")
    return InstallResult(success=True)
