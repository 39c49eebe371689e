"""Optional, interactive Walrus Sites deployment setup.

The generated project ships ``scripts/setup-walrus-deploy.sh``; this step only
offers to run it.  Nothing that happens here fails the post-install run.
"""

from __future__ import annotations

import os
import stat
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Optional

from rich.prompt import Confirm

from walrus_starter.models import Context
from walrus_starter.utils import console, print_info, print_success, print_warning, run_command

DEFAULT_SCRIPT = "scripts/setup-walrus-deploy.sh"


def _confirm_setup() -> bool:
    console.print()
    return Confirm.ask("Setup Walrus Sites deployment? (testnet)", default=False, console=console)


def _retry_hint(context: Context) -> str:
    return f"{context.package_manager.value} run setup-walrus-deploy"


async def setup_walrus_deploy(
    project_path: str | Path,
    context: Context,
    *,
    interactive: Optional[bool] = None,
    confirm: Optional[Callable[[], bool]] = None,
    script: str = DEFAULT_SCRIPT,
    timeout: int | None = None,
) -> bool:
    """Offer to run the deploy setup script and run it if the user agrees.

    Args:
        project_path: Generated project root.
        context: Resolved configuration (used for hint commands).
        interactive: Whether a user is attached. Defaults to ``sys.stdin.isatty()``.
        confirm: Yes/no question callback. Defaults to a Rich confirm prompt.
        script: Script path relative to *project_path*.
        timeout: Optional limit for the script run.

    Returns:
        ``True`` only if the script ran and exited with status 0.
    """
    if interactive is None:
        interactive = sys.stdin.isatty()
    if not interactive:
        return False

    ask = confirm or _confirm_setup
    try:
        accepted = ask()
    except (KeyboardInterrupt, EOFError):
        accepted = False
    if not accepted:
        print_info(f"You can setup later by running: {_retry_hint(context)}")
        return False

    script_path = Path(project_path) / script
    if not script_path.is_file():
        print_warning(f"{script_path.name} not found in project {script_path.parent.name}/")
        return False

    try:
        mode = script_path.stat().st_mode
        script_path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError:
        # Not fatal: the script is run through bash below.
        pass

    print_info("Running Walrus deployment setup...\n")
    try:
        returncode, _, _ = await run_command(
            ["bash", str(script_path), os.fspath(project_path)],
            cwd=project_path,
            timeout=timeout,
            capture=False,
        )
    except OSError as exc:
        print_warning(f"Walrus deployment setup skipped: {exc}")
        print_info(f"You can retry with: {_retry_hint(context)}")
        return False

    if returncode != 0:
        print_warning(
            f"Setup exited with code {returncode}. You can retry with: {_retry_hint(context)}"
        )
        return False

    print_success("Walrus deployment setup complete!")
    return True
